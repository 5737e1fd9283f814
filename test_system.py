#!/usr/bin/env python3
"""
Quick Test Script for QuestMap
==============================

Tests all modules can be imported and basic functionality works.
Runs under pytest or directly as a script.
"""

import sys
import time
import traceback

import numpy as np


def test_imports():
    """Test all module imports"""
    print("Testing imports...")

    from questmap.config import Config, GenerationConfig, ConnectivityConfig
    print("  ✓ config")

    from questmap.terrain import TerrainType, SeededRandom, TerrainSynthesizer, FeatureGenerator
    print("  ✓ terrain")

    from questmap.planning import GridPathfinder, find_path, has_multiple_routes
    print("  ✓ planning")

    from questmap.environment import MapData, ConnectivityEnforcer
    print("  ✓ environment")

    from questmap.pipeline import MapGenerator, generate_map
    print("  ✓ pipeline")

    print("All imports successful!\n")


def test_config():
    """Test configuration"""
    print("Testing configuration...")

    from questmap.config import Config

    config = Config()

    assert config.min_dimension == 2, "Minimum dimension should be 2"
    assert config.max_dimension == 10000, "Maximum dimension should be 10000"
    assert config.connectivity.max_repair_attempts == 10, "Repair budget should be 10"
    assert config.generation.terrain_thresholds == (0.40, 0.60, 0.75, 0.85)
    assert config.get_map_size('tiny').width == 8

    print(f"  Presets: {', '.join(config.map_sizes)}")
    print(f"  Repair policy: {config.connectivity.repair_policy}")

    print("Configuration test passed!\n")


def test_terrain_generation():
    """Test base terrain plus features"""
    print("Testing terrain generation...")

    from questmap.terrain import SeededRandom, TerrainSynthesizer, FeatureGenerator, TerrainType

    rng = SeededRandom("smoke")
    grid = TerrainSynthesizer(rng).generate(100, 80)
    FeatureGenerator(rng).apply(grid)

    assert grid.shape == (80, 100), "Terrain shape mismatch"
    assert grid.dtype == np.uint8
    assert set(np.unique(grid)) <= {int(t) for t in TerrainType}

    print("  Terrain distribution:")
    for t in TerrainType:
        pct = (grid == t).sum() / grid.size * 100
        print(f"    {t.name}: {pct:.1f}%")

    print("Terrain generation test passed!\n")


def test_map_generation():
    """Test full map generation"""
    print("Testing map generation...")

    from questmap import generate_map

    map_data = generate_map(16, 16, seed="abc123")

    print(f"  Start: {map_data.start}")
    print(f"  Goal: {map_data.goal}")

    assert map_data.is_walkable(*map_data.start), "Start should be walkable"
    assert map_data.is_walkable(*map_data.goal), "Goal should be walkable"
    assert map_data.start != map_data.goal, "Start and goal should differ"
    assert map_data.connectivity_guaranteed

    print("Map generation test passed!\n")


def test_astar():
    """Test A* pathfinding on a generated map"""
    print("Testing A* pathfinding...")

    from questmap import generate_map, find_path

    map_data = generate_map(64, 48, seed="astar")
    t0 = time.perf_counter()
    path = find_path(map_data.grid, *map_data.start, *map_data.goal)
    elapsed = time.perf_counter() - t0

    assert path, "No path found"
    print(f"  ✓ Path found: {len(path)} nodes in {elapsed * 1000:.1f} ms")

    assert path[0] == map_data.start, "Path should start at start"
    assert path[-1] == map_data.goal, "Path should end at goal"

    # Check path continuity (4-connected)
    for i in range(len(path) - 1):
        x1, y1 = path[i]
        x2, y2 = path[i + 1]
        assert abs(x2 - x1) + abs(y2 - y1) == 1, f"Path discontinuity at {i}"
        assert map_data.is_walkable(x2, y2), f"Path crosses blocked cell at {i + 1}"

    print("A* pathfinding test passed!\n")


def run_all_tests():
    """Run all tests"""
    print("=" * 60)
    print("QUESTMAP - MODULE TESTS")
    print("=" * 60 + "\n")

    tests = [
        ("Imports", test_imports),
        ("Configuration", test_config),
        ("Terrain Generation", test_terrain_generation),
        ("Map Generation", test_map_generation),
        ("A* Pathfinding", test_astar),
    ]

    results = []

    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True, None))
        except Exception as e:
            print(f"  ✗ EXCEPTION: {e}")
            traceback.print_exc()
            results.append((name, False, str(e)))

    # Summary
    print("=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)

    passed = sum(1 for _, s, _ in results if s)
    total = len(results)

    for name, success, error in results:
        status = "✓ PASS" if success else "✗ FAIL"
        print(f"  {status}: {name}")
        if error:
            print(f"         Error: {error}")

    print(f"\nTotal: {passed}/{total} tests passed")
    print("=" * 60)

    return passed == total


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
