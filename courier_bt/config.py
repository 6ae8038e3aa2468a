"""Configuration dataclasses and YAML loader for the courier simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from .model.direction import Direction
from .model.grid import ObstacleMap


@dataclass
class ScenarioConfig:
    start: Tuple[int, int]
    facing: Direction
    target: Tuple[int, int]


@dataclass
class WallSpec:
    wall_type: str  # "rectangle" or "points"
    data: Dict[str, Any]


@dataclass
class LayoutConfig:
    walls: List[WallSpec]


@dataclass
class SimulationConfig:
    scenario: ScenarioConfig
    layout: LayoutConfig
    max_ticks: int = 100
    tick_delay: float = 0.0  # seconds between ticks

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def default_config_path() -> Path:
    """Packaged scenario used when no --config is given."""
    return Path(__file__).parent / 'configs' / 'warehouse.yaml'


def _parse_cell(raw: Any, key: str) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{key} must be an [x, y] pair, got {raw!r}")
    return (int(raw[0]), int(raw[1]))


def _parse_walls(walls_raw: List[Dict]) -> List[WallSpec]:
    """Parse wall specifications from raw YAML data."""
    walls = []
    for w in walls_raw:
        wall_type = w.get('type', 'rectangle')
        if wall_type == 'rectangle':
            data = {
                'x': w['x'],
                'y': w['y'],
                'width': w['width'],
                'height': w['height']
            }
        elif wall_type == 'points':
            data = {'coords': [_parse_cell(c, 'coords') for c in w['coords']]}
        else:
            raise ValueError(f"Unknown wall type: {wall_type}")
        walls.append(WallSpec(wall_type=wall_type, data=data))
    return walls


def _parse_scenario(raw: Dict) -> ScenarioConfig:
    return ScenarioConfig(
        start=_parse_cell(raw['start'], 'start'),
        facing=Direction.from_name(raw.get('facing', 'north')),
        target=_parse_cell(raw['target'], 'target')
    )


def validate_config(config: SimulationConfig) -> None:
    """Reject scenarios whose start or target cell is blocked."""
    obstacles = ObstacleMap.from_walls(config.layout.walls)
    if config.scenario.start in obstacles:
        raise ValueError(f"Start cell {config.scenario.start} is an obstacle")
    if config.scenario.target in obstacles:
        raise ValueError(f"Target cell {config.scenario.target} is an obstacle")
    if config.max_ticks < 0:
        raise ValueError(f"max_ticks must be >= 0, got {config.max_ticks}")


def load_config(config_path: Optional[Path] = None) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    if config_path is None:
        config_path = default_config_path()
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} is empty or not a mapping")

    scenario = _parse_scenario(raw['scenario'])

    layout_raw = raw.get('layout') or {}
    layout = LayoutConfig(walls=_parse_walls(layout_raw.get('walls') or []))

    sim_raw = raw.get('simulation') or {}

    # Parse export config (optional)
    export_raw = raw.get('export') or {}

    config = SimulationConfig(
        scenario=scenario,
        layout=layout,
        max_ticks=int(sim_raw.get('max_ticks', 100)),
        tick_delay=float(sim_raw.get('tick_delay', 0.0)),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False)
    )
    validate_config(config)
    return config
