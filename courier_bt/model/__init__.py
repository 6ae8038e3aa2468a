"""Model package for the courier simulation."""

from .direction import Direction
from .state import AgentSnapshot, TickState
from .grid import ObstacleMap
from .agent import Agent
from .engine import SimulationEngine

__all__ = [
    'Direction',
    'AgentSnapshot',
    'TickState',
    'ObstacleMap',
    'Agent',
    'SimulationEngine',
]
