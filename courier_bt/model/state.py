"""State snapshot dataclasses for the courier simulation."""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of the robot's state."""
    x: int
    y: int
    facing: str  # "North", "East", "South", "West"
    has_package: bool

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class TickState:
    """Snapshot of the simulation after one tree evaluation."""
    tick: int
    agent: AgentSnapshot
    result: bool                # return value of the root node
    metrics: Dict[str, float]   # moves, turns, stall streaks, delivered

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "tick": self.tick,
            "x": self.agent.x,
            "y": self.agent.y,
            "facing": self.agent.facing,
            "has_package": int(self.agent.has_package),
            "result": int(self.result),
        }
