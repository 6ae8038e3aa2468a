"""Courier robot: decision predicates and grid actions."""

from typing import Iterable, Tuple, Union

from .direction import Direction
from .grid import ObstacleMap, Position
from .state import AgentSnapshot


class Agent:
    """
    Warehouse robot carrying a single package to a fixed target cell.

    Predicates never mutate state. Actions report success as a bool and
    leave the robot untouched when they fail:

    - move_forward / move_backward fail if the destination is an obstacle
    - turn_left / turn_right always succeed (one quarter-turn)
    - pick_package fails if already holding a package
    - deliver_package fails unless holding a package at the target
    """

    def __init__(self,
                 start: Position,
                 facing: Direction,
                 target: Position,
                 obstacles: Union[ObstacleMap, Iterable[Position]] = ()):
        if not isinstance(obstacles, ObstacleMap):
            obstacles = ObstacleMap(obstacles)
        self._x, self._y = start
        self._facing = facing
        self._target = (int(target[0]), int(target[1]))
        self._obstacles = obstacles
        self._has_package = False

    # Read-only queries

    @property
    def position(self) -> Position:
        return (self._x, self._y)

    @property
    def facing(self) -> Direction:
        return self._facing

    @property
    def has_package(self) -> bool:
        return self._has_package

    @property
    def target(self) -> Position:
        return self._target

    @property
    def obstacles(self) -> ObstacleMap:
        return self._obstacles

    def is_package_delivered(self) -> bool:
        return not self._has_package and self.is_at_target()

    def cell_ahead(self) -> Position:
        dx, dy = self._facing.unit_vector
        return (self._x + dx, self._y + dy)

    def cell_behind(self) -> Position:
        dx, dy = self._facing.opposite.unit_vector
        return (self._x + dx, self._y + dy)

    def snapshot(self) -> AgentSnapshot:
        return AgentSnapshot(
            x=self._x,
            y=self._y,
            facing=self._facing.label,
            has_package=self._has_package
        )

    # Predicates

    def _offset(self) -> Tuple[int, int]:
        return (self._target[0] - self._x, self._target[1] - self._y)

    def is_at_target(self) -> bool:
        return self.position == self._target

    def has_package_in_hand(self) -> bool:
        return self._has_package

    def is_facing_obstacle(self) -> bool:
        return self._obstacles.is_blocked(self.cell_ahead())

    def is_facing_target(self) -> bool:
        """
        True if the target lies strictly ahead along the facing axis.

        Only the facing axis is checked, so residual error on the other
        axis is tolerated. Being on the target counts as facing it.
        """
        dx, dy = self._offset()
        if dx == 0 and dy == 0:
            return True
        if self._facing is Direction.NORTH:
            return dy > 0
        if self._facing is Direction.EAST:
            return dx > 0
        if self._facing is Direction.SOUTH:
            return dy < 0
        return dx < 0

    def should_turn_right(self) -> bool:
        """
        Dominant-axis turn rule.

        With |dx| >= |dy| the robot should line up with the x axis, which
        only concerns North/South facings; otherwise it should line up with
        the y axis, which only concerns East/West facings. On a tie with an
        East/West facing both this and should_turn_left are False.
        """
        dx, dy = self._offset()
        if dx == 0 and dy == 0:
            return False
        if abs(dx) >= abs(dy):
            if self._facing is Direction.NORTH:
                return dx > 0
            if self._facing is Direction.SOUTH:
                return dx < 0
            return False
        if self._facing is Direction.EAST:
            return dy < 0
        if self._facing is Direction.WEST:
            return dy > 0
        return False

    def should_turn_left(self) -> bool:
        """Mirror of should_turn_right."""
        dx, dy = self._offset()
        if dx == 0 and dy == 0:
            return False
        if abs(dx) >= abs(dy):
            if self._facing is Direction.NORTH:
                return dx < 0
            if self._facing is Direction.SOUTH:
                return dx > 0
            return False
        if self._facing is Direction.EAST:
            return dy > 0
        if self._facing is Direction.WEST:
            return dy < 0
        return False

    # Actions

    def _move_to(self, cell: Position) -> bool:
        if self._obstacles.is_blocked(cell):
            return False
        self._x, self._y = cell
        return True

    def move_forward(self) -> bool:
        return self._move_to(self.cell_ahead())

    def move_backward(self) -> bool:
        return self._move_to(self.cell_behind())

    def turn_left(self) -> bool:
        self._facing = self._facing.turned_left()
        return True

    def turn_right(self) -> bool:
        self._facing = self._facing.turned_right()
        return True

    def pick_package(self) -> bool:
        if self._has_package:
            return False
        self._has_package = True
        return True

    def deliver_package(self) -> bool:
        if not (self._has_package and self.is_at_target()):
            return False
        self._has_package = False
        return True

    def __repr__(self) -> str:
        return (f"Agent(pos={self.position}, facing={self._facing.label}, "
                f"has_package={self._has_package}, target={self._target})")
