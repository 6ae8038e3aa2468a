"""Summary report generation for the courier simulation."""

from typing import Dict, List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import AgentSnapshot, TickState


class Reporter:
    """
    Generates summary statistics and formatted text report.

    Also watches for a limit cycle: the controller is deterministic and
    keeps no memory, so once a full robot state repeats the run will loop
    through the same states until the tick cap.
    """

    def __init__(self, config_path: str, initial: "AgentSnapshot"):
        self.config_path = config_path
        self.initial = initial
        self.step_metrics: List[Dict] = []
        self.visited = {initial.position}
        self.cycle_start: Optional[int] = None
        self.cycle_period: Optional[int] = None
        self._seen: Dict["AgentSnapshot", int] = {initial: 0}

    def update(self, state: "TickState") -> None:
        """Accumulate metrics per tick."""
        self.step_metrics.append(state.metrics.copy())
        self.visited.add(state.agent.position)

        if self.cycle_start is None:
            first_seen = self._seen.get(state.agent)
            if first_seen is not None:
                self.cycle_start = first_seen
                self.cycle_period = state.tick - first_seen
            else:
                self._seen[state.agent] = state.tick

    @property
    def cycle_detected(self) -> bool:
        return self.cycle_start is not None

    def generate_summary(self, summary: Dict,
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        fx, fy = summary['final_position']
        outcome = "DELIVERED" if summary['delivered'] else "NOT DELIVERED"

        if self.cycle_detected:
            cycle_line = (f"[X] Limit Cycle: entered at tick {self.cycle_start}, "
                          f"period {self.cycle_period} ticks")
        else:
            cycle_line = "[ ] Limit Cycle: none detected"
        stall = summary['max_stall_streak']

        lines = [
            "",
            "=" * 80,
            "                    COURIER ROBOT DELIVERY REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Start:         ({self.initial.x},{self.initial.y}) facing {self.initial.facing}",
            "",
            "DELIVERY METRICS",
            "-" * 40,
            f"Outcome:               {outcome}",
            f"Total Ticks:           {summary['total_ticks']}",
            f"Final Position:        ({fx},{fy}) facing {summary['final_facing']}",
            f"Moves:                 {summary['moves']}",
            f"Turning Ticks:         {summary['turns']}",
            f"Distinct Cells:        {len(self.visited)}",
            "",
            "EMERGENT BEHAVIORS DETECTED",
            "-" * 40,
            cycle_line,
            f"[{'X' if stall > 0 else ' '}] Stalled Ticks: longest streak {stall}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'trajectory.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
