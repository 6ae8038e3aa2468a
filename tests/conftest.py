import pytest

from courier_bt.config import LayoutConfig, ScenarioConfig, SimulationConfig, WallSpec
from courier_bt.model.direction import Direction

WAREHOUSE_OBSTACLES = [(2, 3), (3, 3), (4, 3), (5, 1), (5, 2), (5, 3)]


@pytest.fixture
def make_config(tmp_path):
    """Factory for in-memory scenarios."""
    def _make(start, facing, target, obstacles=(), max_ticks=100):
        walls = []
        if obstacles:
            walls.append(WallSpec(wall_type='points',
                                  data={'coords': list(obstacles)}))
        return SimulationConfig(
            scenario=ScenarioConfig(start=start, facing=facing, target=target),
            layout=LayoutConfig(walls=walls),
            max_ticks=max_ticks,
            out_dir=tmp_path
        )
    return _make


@pytest.fixture
def warehouse_config(make_config):
    return make_config((1, 1), Direction.EAST, (6, 6), WAREHOUSE_OBSTACLES)

