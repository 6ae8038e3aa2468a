"""Console narration of robot actions."""

import sys
from typing import Callable, List, Optional, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.agent import Agent


class Narrator:
    """
    Wraps robot actions so each call prints what happened.

    The agent's actions only return success flags; this observer reads the
    agent around each call to describe the outcome. Every line is also kept
    in self.lines, even when quiet.
    """

    def __init__(self, quiet: bool = False, stream: Optional[TextIO] = None):
        self.quiet = quiet
        self.stream = stream
        self.lines: List[str] = []

    def wrap(self, name: str, operation: Callable[[], bool],
             agent: "Agent") -> Callable[[], bool]:
        def narrated() -> bool:
            if name == 'move_forward':
                destination = agent.cell_ahead()
            elif name == 'move_backward':
                destination = agent.cell_behind()
            else:
                destination = None
            ok = operation()
            message = self.describe(name, ok, agent, destination)
            if message:
                self.emit(message)
            return ok

        narrated.__name__ = name
        return narrated

    def describe(self, name: str, ok: bool, agent: "Agent",
                 destination=None) -> Optional[str]:
        """Text for one action outcome, or None if there is nothing to say."""
        if destination is not None:
            x, y = destination
            if ok:
                return f"Moved to [{x},{y}]"
            return f"Obstacle at [{x},{y}]"
        if name in ('turn_left', 'turn_right'):
            side = 'left' if name == 'turn_left' else 'right'
            return f"Turned {side}, now facing {agent.facing.label}"
        if name == 'pick_package' and ok:
            return "Picked up package!"
        if name == 'deliver_package' and ok:
            return "Delivered package!"
        return None

    def emit(self, message: str) -> None:
        self.lines.append(message)
        if not self.quiet:
            print(message, file=self.stream or sys.stdout)
