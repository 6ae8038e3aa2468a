"""Static obstacle map for the courier grid."""

import numpy as np
from typing import FrozenSet, Iterable, Iterator, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import WallSpec

Position = Tuple[int, int]


class ObstacleMap:
    """
    Immutable set of blocked cells on an unbounded grid.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    """

    def __init__(self, cells: Iterable[Position] = ()):
        self._cells: FrozenSet[Position] = frozenset(
            (int(x), int(y)) for x, y in cells
        )

    @classmethod
    def from_walls(cls, walls: List["WallSpec"]) -> "ObstacleMap":
        """Collect blocked cells from rectangle and point wall specs."""
        cells = set()
        for wall in walls:
            if wall.wall_type == "rectangle":
                x, y = wall.data['x'], wall.data['y']
                for wx in range(x, x + wall.data['width']):
                    for wy in range(y, y + wall.data['height']):
                        cells.add((wx, wy))
            elif wall.wall_type == "points":
                cells.update(wall.data['coords'])
            else:
                raise ValueError(f"Unknown wall type: {wall.wall_type}")
        return cls(cells)

    def is_blocked(self, cell: Position) -> bool:
        """Check if cell holds an obstacle."""
        return cell in self._cells

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def __iter__(self) -> Iterator[Position]:
        return iter(sorted(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def bounds(self, *extra: Position,
               margin: int = 1) -> Tuple[int, int, int, int]:
        """
        Bounding box (x_min, y_min, x_max, y_max) around all obstacles and
        any extra cells, padded by margin on every side.
        """
        cells = list(self._cells) + list(extra)
        if not cells:
            return (-margin, -margin, margin, margin)
        xs = [x for x, _ in cells]
        ys = [y for _, y in cells]
        return (min(xs) - margin, min(ys) - margin,
                max(xs) + margin, max(ys) + margin)

    def to_mask(self, x_min: int, y_min: int,
                width: int, height: int) -> np.ndarray:
        """Boolean mask of the window starting at (x_min, y_min): True = blocked."""
        mask = np.zeros((height, width), dtype=bool)
        for x, y in self._cells:
            col, row = x - x_min, y - y_min
            if 0 <= col < width and 0 <= row < height:
                mask[row, col] = True
        return mask

    def __repr__(self) -> str:
        return f"ObstacleMap({len(self._cells)} cells)"
