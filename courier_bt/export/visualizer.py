"""Visualization and export for the courier simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Tuple, TYPE_CHECKING
from PIL import Image
import io

from ..model.direction import Direction
from ..model.grid import ObstacleMap

if TYPE_CHECKING:
    from ..model.state import AgentSnapshot, TickState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots of the travelled path
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'wall': '#2C3E50',      # Dark blue-gray
        'floor': '#ECF0F1',     # Light gray
        'target': '#F39C12',    # Orange
        'start': '#27AE60',     # Green
        'trail': '#3498DB',     # Blue
        'loaded': '#E74C3C',    # Red
        'empty': '#95A5A6',     # Gray
    }

    def __init__(self, obstacles: ObstacleMap, initial: "AgentSnapshot",
                 target: Tuple[int, int]):
        self.obstacles = obstacles
        self.start = initial.position
        self.target = target
        self.trail: List[Tuple[int, int]] = [initial.position]
        self.frames: List[Image.Image] = []

    def update(self, state: "TickState") -> None:
        """Extend the trail with the robot's position after a tick."""
        if state.agent.position != self.trail[-1]:
            self.trail.append(state.agent.position)

    def _window(self) -> Tuple[int, int, int, int]:
        x_min, y_min, x_max, y_max = self.obstacles.bounds(
            self.start, self.target, *self.trail
        )
        return x_min, y_min, x_max - x_min + 1, y_max - y_min + 1

    def _create_figure(self, state: "TickState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        x_min, y_min, width, height = self._window()
        aspect = width / height
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Base layer: obstacles and floor
        base = np.ones((height, width, 3))
        base[:, :] = to_rgb(self.COLORS['floor'])
        walls = self.obstacles.to_mask(x_min, y_min, width, height)
        base[walls] = to_rgb(self.COLORS['wall'])

        extent = [x_min - 0.5, x_min + width - 0.5,
                  y_min - 0.5, y_min + height - 0.5]
        ax.imshow(base, origin='lower', aspect='equal', extent=extent)

        # Trail
        xs, ys = zip(*self.trail)
        ax.plot(xs, ys, '-', color=self.COLORS['trail'], linewidth=2, alpha=0.6)

        ax.plot(*self.start, 'o', color=self.COLORS['start'],
                markersize=10, markeredgecolor='black', markeredgewidth=0.5)
        ax.plot(*self.target, 's', color=self.COLORS['target'],
                markersize=12, markeredgecolor='black', markeredgewidth=0.5)

        # Robot with facing arrow
        agent = state.agent
        color = self.COLORS['loaded' if agent.has_package else 'empty']
        dx, dy = Direction.from_name(agent.facing).unit_vector
        ax.plot(agent.x, agent.y, 'o', color=color, markersize=9,
                markeredgecolor='white', markeredgewidth=0.5)
        ax.arrow(agent.x, agent.y, 0.35 * dx, 0.35 * dy,
                 head_width=0.2, head_length=0.15, color='black')

        status = 'carrying' if agent.has_package else 'delivered'
        ax.set_title(f'Tick {state.tick} | ({agent.x},{agent.y}) '
                     f'facing {agent.facing} | {status}')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xticks(range(x_min, x_min + width))
        ax.set_yticks(range(y_min, y_min + height))

        # Legend
        legend_elements = [
            plt.Line2D([0], [0], marker='o', color='w', label='Start',
                       markerfacecolor=self.COLORS['start'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Target',
                       markerfacecolor=self.COLORS['target'], markersize=8),
            plt.Line2D([0], [0], marker='o', color='w', label='Robot',
                       markerfacecolor=color, markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "TickState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "TickState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        # Frames can differ in size when the trail widens the window.
        size = self.frames[0].size
        frames = [f if f.size == size else f.resize(size) for f in self.frames]

        frames[0].save(
            output_path,
            save_all=True,
            append_images=frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
