"""Compass directions for the courier grid."""

from enum import Enum
from typing import Tuple


class Direction(Enum):
    """
    Facing of the robot.

    Values follow the clockwise cycle North -> East -> South -> West, so a
    right turn is +1 and a left turn is -1 (modulo 4). North is +y.
    """
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Parse a config name such as "east" (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name}") from None

    def turned_right(self) -> "Direction":
        return Direction((self.value + 1) % 4)

    def turned_left(self) -> "Direction":
        return Direction((self.value + 3) % 4)

    @property
    def opposite(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    @property
    def unit_vector(self) -> Tuple[int, int]:
        return _UNIT_VECTORS[self]

    @property
    def label(self) -> str:
        """Display name, e.g. "North"."""
        return self.name.capitalize()


_UNIT_VECTORS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}
