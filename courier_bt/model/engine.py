"""Simulation engine for the courier robot."""

import logging
from functools import partial
from typing import Callable, Dict, Optional, Protocol, TYPE_CHECKING

from .agent import Agent
from .grid import ObstacleMap
from .state import AgentSnapshot, TickState
from ..behavior.nodes import Node
from ..behavior.policy import build_policy_tree

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class ActionObserver(Protocol):
    """Anything that can wrap a robot action, e.g. the console narrator."""

    def wrap(self, name: str, operation: Callable[[], bool],
             agent: Agent) -> Callable[[], bool]:
        ...


class SimulationEngine:
    """
    Orchestrates the discrete-time delivery loop.

    Implements:
    1. Obstacle map and robot initialization
    2. Package pickup before the first tick
    3. One policy tree evaluation per tick
    4. Progress metrics and state snapshots
    """

    def __init__(self, config: "SimulationConfig",
                 observer: Optional[ActionObserver] = None):
        self.config = config
        self.current_tick = 0

        self.obstacles = ObstacleMap.from_walls(config.layout.walls)
        scenario = config.scenario
        self.agent = Agent(scenario.start, scenario.facing,
                           scenario.target, self.obstacles)

        on_action = None
        if observer is not None:
            on_action = partial(observer.wrap, agent=self.agent)

        # Pickup is setup, not part of the policy.
        pick = self.agent.pick_package
        if on_action is not None:
            pick = on_action('pick_package', pick)
        pick()

        self.tree: Node = build_policy_tree(self.agent, on_action=on_action)
        self.initial_snapshot: AgentSnapshot = self.agent.snapshot()

        # Metrics tracking
        self.moves = 0
        self.turns = 0
        self.stall_streak = 0
        self.max_stall_streak = 0

    def step(self) -> TickState:
        """Evaluate the tree once and return the resulting snapshot."""
        before = self.agent.snapshot()
        result = self.tree.evaluate()
        after = self.agent.snapshot()
        self.current_tick += 1

        if after.position != before.position:
            self.moves += 1
        if after.facing != before.facing:
            self.turns += 1
        if after == before:
            self.stall_streak += 1
            self.max_stall_streak = max(self.max_stall_streak, self.stall_streak)
        else:
            self.stall_streak = 0

        logger.debug("tick %d: %s -> %s (result=%s)",
                     self.current_tick, before, after, result)

        return TickState(
            tick=self.current_tick,
            agent=after,
            result=result,
            metrics=self._metrics()
        )

    def _metrics(self) -> Dict[str, float]:
        return {
            'moves': self.moves,
            'turns': self.turns,
            'stall_streak': self.stall_streak,
            'max_stall_streak': self.max_stall_streak,
            'delivered': int(self.agent.is_package_delivered()),
        }

    def is_delivered(self) -> bool:
        return self.agent.is_package_delivered()

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return (self.agent.is_package_delivered() or
                self.current_tick >= self.config.max_ticks)

    def run(self) -> Optional[TickState]:
        """Step until finished; returns the last state (None if no tick ran)."""
        state = None
        while not self.is_finished():
            state = self.step()
        return state

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        x, y = self.agent.position
        return {
            'total_ticks': self.current_tick,
            'delivered': self.agent.is_package_delivered(),
            'final_position': (x, y),
            'final_facing': self.agent.facing.label,
            'moves': self.moves,
            'turns': self.turns,
            'max_stall_streak': self.max_stall_streak,
        }
