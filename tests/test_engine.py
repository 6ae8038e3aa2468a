from courier_bt.export.narrator import Narrator
from courier_bt.export.reporter import Reporter
from courier_bt.model.direction import Direction
from courier_bt.model.engine import SimulationEngine


def run_with_reporter(engine):
    reporter = Reporter("test", engine.initial_snapshot)
    states = []
    while not engine.is_finished():
        state = engine.step()
        reporter.update(state)
        states.append(state)
    return states, reporter


def test_package_picked_up_before_first_tick(warehouse_config):
    engine = SimulationEngine(warehouse_config)
    assert engine.agent.has_package
    assert engine.current_tick == 0
    assert engine.initial_snapshot.has_package


def test_pickup_goes_through_observer(warehouse_config):
    narrator = Narrator(quiet=True)
    SimulationEngine(warehouse_config, observer=narrator)
    assert narrator.lines == ["Picked up package!"]


def test_delivers_around_wall(make_config):
    config = make_config((1, 1), Direction.EAST, (6, 6), [(2, 3), (3, 3), (4, 3)])
    engine = SimulationEngine(config)
    last = engine.run()

    assert engine.is_delivered()
    assert last.tick == 12
    assert last.metrics['delivered'] == 1
    summary = engine.get_summary()
    assert summary['total_ticks'] == 12
    assert summary['final_position'] == (6, 6)
    assert summary['moves'] == 10
    assert summary['turns'] == 1
    assert summary['max_stall_streak'] == 0


def test_tie_deadlock_scenario_delivers(make_config):
    config = make_config((0, 0), Direction.WEST, (3, 3))
    engine = SimulationEngine(config)
    states, _ = run_with_reporter(engine)

    assert engine.is_delivered()
    assert [s.agent.facing for s in states[:2]] == ["South", "East"]
    assert len(states) == 10


def test_detour_scenario_delivers(make_config):
    config = make_config((0, 0), Direction.EAST, (4, 0), [(2, 0)])
    engine = SimulationEngine(config)
    states, reporter = run_with_reporter(engine)

    assert engine.is_delivered()
    assert len(states) == 9
    assert (1, 1) in reporter.visited
    assert not reporter.cycle_detected


def test_warehouse_scenario_never_stalls(warehouse_config):
    engine = SimulationEngine(warehouse_config)
    states, _ = run_with_reporter(engine)

    previous = engine.initial_snapshot
    streak = 0
    for state in states:
        streak = streak + 1 if state.agent == previous else 0
        assert streak <= 4
        previous = state.agent
    assert engine.max_stall_streak == 0


def test_warehouse_scenario_loops_in_pocket(warehouse_config):
    # The wall at y=3 and the column at x=5 trap the greedy controller.
    engine = SimulationEngine(warehouse_config)
    states, reporter = run_with_reporter(engine)

    assert not engine.is_delivered()
    assert engine.current_tick == warehouse_config.max_ticks
    assert reporter.cycle_start == 4
    assert reporter.cycle_period == 8
    assert all(s.result for s in states)
    assert {s.agent.position for s in states[4:]} == {(2, 2), (3, 2), (4, 2)}


def test_zero_tick_cap(make_config):
    engine = SimulationEngine(make_config((0, 0), Direction.EAST, (3, 0), max_ticks=0))
    assert engine.is_finished()
    assert engine.run() is None


def test_stall_streak_counts_no_op_ticks(make_config):
    # Already at target: first tick delivers, later ticks change nothing.
    config = make_config((2, 2), Direction.NORTH, (2, 2), max_ticks=5)
    engine = SimulationEngine(config)
    state = engine.step()
    assert state.result is True
    assert engine.is_finished()

    state = engine.step()
    assert state.result is False
    state = engine.step()
    assert state.metrics['stall_streak'] == 2
    assert engine.max_stall_streak == 2


def test_tick_state_csv_row(make_config):
    engine = SimulationEngine(make_config((0, 0), Direction.EAST, (3, 0)))
    row = engine.step().to_csv_row()
    assert row == {'tick': 1, 'x': 1, 'y': 0, 'facing': 'East',
                   'has_package': 1, 'result': 1}
