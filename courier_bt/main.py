#!/usr/bin/env python3
"""
Courier Robot Behavior Tree Simulation

A warehouse robot carries one package to a target cell on a grid with
static obstacles, choosing one action per tick from a behavior tree.

Usage:
    courier-bt [--config scenario.yaml] [options]

Examples:
    courier-bt
    courier-bt --config courier_bt/configs/open_floor.yaml --delay 0
    courier-bt --ticks 40 --gif --out-dir results/
    courier-bt --no-csv --no-snapshot --quiet
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from .config import default_config_path, load_config
from .behavior.nodes import render_tree
from .model.engine import SimulationEngine
from .export.csv_writer import CSVWriter
from .export.narrator import Narrator
from .export.visualizer import Visualizer
from .export.reporter import Reporter

EXIT_DELIVERED = 0
EXIT_CONFIG_ERROR = 1
EXIT_NOT_DELIVERED = 2


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Courier Robot Behavior Tree Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    courier-bt
    courier-bt --config courier_bt/configs/open_floor.yaml --delay 0
    courier-bt --ticks 40 --gif --out-dir results/
    courier-bt --no-csv --no-snapshot --quiet
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML scenario (default: packaged warehouse.yaml)')

    # Optional overrides
    parser.add_argument('--ticks', type=int, default=None,
                        help='Override maximum number of ticks')
    parser.add_argument('--delay', type=float, default=None,
                        help='Override seconds to sleep between ticks')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Log behavior tree decisions')
    parser.add_argument('--show-tree', action='store_true', default=False,
                        help='Print the policy tree before running')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    config_path = args.config or default_config_path()

    # Load configuration
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {config_path}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    # Apply CLI overrides
    if args.ticks is not None:
        config.max_ticks = args.ticks
    if args.delay is not None:
        config.tick_delay = args.delay
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    config.out_dir = args.out_dir

    if not config.quiet:
        scenario = config.scenario
        print("Initializing simulation...")
        print(f"  Start: {scenario.start} facing {scenario.facing.label}")
        print(f"  Target: {scenario.target}")
        print(f"  Max ticks: {config.max_ticks}")

    narrator = Narrator(quiet=config.quiet)
    engine = SimulationEngine(config, observer=narrator)

    if args.show_tree and not config.quiet:
        print(render_tree(engine.tree))

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'trajectory.csv')
        csv_writer.open()

    visualizer = Visualizer(engine.obstacles, engine.initial_snapshot,
                            engine.agent.target)
    reporter = Reporter(str(config_path), engine.initial_snapshot)

    # Main simulation loop
    final_state = None
    try:
        while not engine.is_finished():
            if not config.quiet:
                x, y = engine.agent.position
                print(f"[Tick {engine.current_tick}]: Robot at ({x},{y}), "
                      f"facing {engine.agent.facing.label}.")

            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            visualizer.update(state)
            if config.gif_enabled:
                visualizer.buffer_frame(state)

            reporter.update(state)

            if config.tick_delay > 0 and not engine.is_finished():
                time.sleep(config.tick_delay)

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if not config.quiet:
        print("Delivery complete!" if engine.is_delivered() else "Delivery failed")

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'trajectory.csv'}")

    if config.snapshot_enabled and final_state:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet and final_state:
        report = reporter.generate_summary(
            engine.get_summary(),
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return EXIT_DELIVERED if engine.is_delivered() else EXIT_NOT_DELIVERED


if __name__ == '__main__':
    sys.exit(main())
