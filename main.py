#!/usr/bin/env python3
"""
QuestMap - Main Entry Point
===========================

Usage:
    # Generate and print a single map
    python main.py generate --width 16 --height 16 --seed abc123 --show

    # Use a named size preset
    python main.py generate --preset gigantic --seed abc123

    # Generate a batch of maps and write a JSON summary
    python main.py batch --count 20 --seed_base 42 --preset huge --parallel --output batch.json

    # Path and route-multiplicity check for a generated map
    python main.py route --width 32 --height 32 --seed abc123

As a library:
    from questmap import generate_map, find_path

    map_data = generate_map(16, 16, seed="abc123")
    path = find_path(map_data.grid, *map_data.start, *map_data.goal)
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import structlog


def configure_logging(verbose: bool = False):
    """Route structlog through stdlib logging at the requested level"""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.KeyValueRenderer(key_order=['event', 'level', 'logger']),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _resolve_size(args, config):
    if args.preset:
        preset = config.get_map_size(args.preset)
        return preset.width, preset.height
    return args.width, args.height


def run_generate(args):
    """Generate a single map"""
    from questmap import Config, MapGenerator, InvalidMapSizeError

    config = Config(verbose=args.verbose)
    generator = MapGenerator(config)

    try:
        width, height = _resolve_size(args, config)
        map_data = generator.generate_map(width, height, args.seed)
    except (InvalidMapSizeError, KeyError) as e:
        print(f"Error: {e}")
        return 1

    stats = map_data.get_stats()

    print("=" * 60)
    print(f"MAP {map_data.width}x{map_data.height} (seed={map_data.seed})")
    print("=" * 60)
    print(f"Start: {map_data.start}  Goal: {map_data.goal}")
    print(f"Straight-line distance: {stats['straight_line_distance']:.1f} cells")
    print(f"Connected: {map_data.connectivity_guaranteed} "
          f"(repairs: {map_data.repair_attempts})")
    print(f"Walkable: {stats['walkable_fraction'] * 100:.1f}% "
          f"in {stats['walkable_regions']} region(s)")
    for name, entry in stats['terrain_distribution'].items():
        print(f"  {name:15s} {entry['percentage']:6.2f}%")

    if args.show:
        print()
        print(map_data.render_ascii())

    print("=" * 60)
    return 0 if map_data.connectivity_guaranteed else 2


def run_batch(args):
    """Generate a batch of maps"""
    from questmap import Config, MapGenerator, InvalidMapSizeError

    config = Config(verbose=args.verbose)
    generator = MapGenerator(config)

    try:
        width, height = _resolve_size(args, config)
        seeds = [f"{args.seed_base + i}" for i in range(args.count)]

        t0 = time.perf_counter()
        maps = generator.generate_batch(
            seeds, width, height,
            parallel=args.parallel,
            max_workers=args.workers,
        )
        elapsed = time.perf_counter() - t0
    except (InvalidMapSizeError, KeyError) as e:
        print(f"Error: {e}")
        return 1

    summary = generator.summarize(maps, elapsed)

    print(f"Generated {summary.num_maps} maps of {width}x{height} in {elapsed:.2f}s")
    print(f"Connected: {summary.connected}/{summary.num_maps}  "
          f"Repaired: {summary.repaired}  "
          f"Repair attempts: {summary.total_repair_attempts}")

    if args.output:
        output_path = Path(args.output)
        with open(output_path, 'w') as f:
            json.dump(summary.to_dict(), f, indent=2)
        print(f"Summary saved to: {output_path}")

    return 0 if summary.connected == summary.num_maps else 2


def run_route(args):
    """Find the start-goal path and check for alternate routes"""
    from questmap import Config, MapGenerator, InvalidMapSizeError

    config = Config(verbose=args.verbose)
    config.planner.max_expansions = args.max_expansions
    generator = MapGenerator(config)

    try:
        width, height = _resolve_size(args, config)
        map_data = generator.generate_map(width, height, args.seed)
    except (InvalidMapSizeError, KeyError) as e:
        print(f"Error: {e}")
        return 1

    t0 = time.perf_counter()
    path = generator.find_path(map_data)
    elapsed = time.perf_counter() - t0

    if not path:
        print(f"No path from {map_data.start} to {map_data.goal}")
        return 2

    multiple = generator.has_multiple_routes(map_data.grid, *map_data.start, *map_data.goal)

    print(f"Seed: {map_data.seed}")
    print(f"Path: {len(path)} cells from {path[0]} to {path[-1]} ({elapsed * 1000:.1f} ms)")
    print(f"Multiple routes: {'yes' if multiple else 'no'}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description='QuestMap procedural tile-map generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_size_args(p):
        p.add_argument('--width', type=int, default=16, help='Map width in cells')
        p.add_argument('--height', type=int, default=16, help='Map height in cells')
        p.add_argument('--preset', type=str, help='Named size preset (overrides width/height)')
        p.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a single map')
    add_size_args(gen_parser)
    gen_parser.add_argument('--seed', type=str, help='Seed string (random if omitted)')
    gen_parser.add_argument('--show', action='store_true', help='Print the map as text')

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Generate a batch of maps')
    add_size_args(batch_parser)
    batch_parser.add_argument('--count', type=int, default=10, help='Number of maps')
    batch_parser.add_argument('--seed_base', type=int, default=42, help='Base seed')
    batch_parser.add_argument('--parallel', action='store_true', help='Use parallel execution')
    batch_parser.add_argument('--workers', type=int, default=4, help='Number of workers')
    batch_parser.add_argument('--output', type=str, help='JSON summary file')

    # Route command
    route_parser = subparsers.add_parser('route', help='Path and alternate-route check')
    add_size_args(route_parser)
    route_parser.add_argument('--seed', type=str, help='Seed string (random if omitted)')
    route_parser.add_argument('--max_expansions', type=int, help='A* expansion budget')

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    if args.command == 'generate':
        return run_generate(args)
    elif args.command == 'batch':
        return run_batch(args)
    elif args.command == 'route':
        return run_route(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
