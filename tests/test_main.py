from pathlib import Path

import pytest

from courier_bt import main as cli

CONFIGS = Path(cli.__file__).parent / 'configs'


def test_open_floor_delivers_and_exports(tmp_path, capsys):
    code = cli.main(['--config', str(CONFIGS / 'open_floor.yaml'),
                     '--delay', '0', '--out-dir', str(tmp_path)])
    out = capsys.readouterr().out

    assert code == cli.EXIT_DELIVERED
    assert "Picked up package!" in out
    assert "[Tick 0]: Robot at (1,1), facing East." in out
    assert "Moved to [2,1]" in out
    assert "Delivered package!" in out
    assert "Delivery complete!" in out
    assert "COURIER ROBOT DELIVERY REPORT" in out
    assert (tmp_path / 'trajectory.csv').exists()
    assert (tmp_path / 'final_state.png').exists()
    assert not (tmp_path / 'simulation.gif').exists()


def test_default_scenario_hits_tick_cap(tmp_path, capsys):
    code = cli.main(['--ticks', '20', '--delay', '0', '--no-csv',
                     '--no-snapshot', '--out-dir', str(tmp_path)])
    out = capsys.readouterr().out

    assert code == cli.EXIT_NOT_DELIVERED
    assert "Delivery failed" in out
    assert "[Tick 19]" in out
    assert "[Tick 20]" not in out
    assert "Limit Cycle: entered at tick 4" in out
    assert not (tmp_path / 'trajectory.csv').exists()


def test_quiet_run(tmp_path, capsys):
    code = cli.main(['--config', str(CONFIGS / 'open_floor.yaml'), '--quiet',
                     '--delay', '0', '--no-snapshot', '--gif',
                     '--out-dir', str(tmp_path)])
    assert code == cli.EXIT_DELIVERED
    assert capsys.readouterr().out == ""
    assert (tmp_path / 'simulation.gif').exists()


def test_show_tree(tmp_path, capsys):
    cli.main(['--config', str(CONFIGS / 'open_floor.yaml'), '--show-tree',
              '--delay', '0', '--no-csv', '--no-snapshot',
              '--out-dir', str(tmp_path)])
    out = capsys.readouterr().out
    assert "Selector: root" in out
    assert "    Sequence: turn_fallback" in out


def test_missing_config(tmp_path, capsys):
    code = cli.main(['--config', str(tmp_path / 'missing.yaml')])
    assert code == cli.EXIT_CONFIG_ERROR
    assert "not found" in capsys.readouterr().err


def test_invalid_config(tmp_path, capsys):
    path = tmp_path / 'bad.yaml'
    path.write_text("scenario:\n  start: [0, 0]\n  facing: sideways\n  target: [1, 1]\n")
    code = cli.main(['--config', str(path)])
    assert code == cli.EXIT_CONFIG_ERROR
    assert "Error loading config" in capsys.readouterr().err


def test_help_exits(capsys):
    with pytest.raises(SystemExit):
        cli.main(['--help'])
    assert "--show-tree" in capsys.readouterr().out
