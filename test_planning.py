"""
Tests for the grid pathfinder, region labelling, route multiplicity and
the connectivity pass.
"""

import numpy as np
import pytest

from questmap import TerrainType, generate_map, find_path, has_multiple_routes
from questmap.config import ConnectivityConfig
from questmap.environment import ConnectivityEnforcer, boundary_cells, carve_staircase
from questmap.planning import GridPathfinder, is_adjacent, label_regions, region_sizes, same_region
from questmap.terrain import SeededRandom

GLYPHS = {
    '.': TerrainType.GRASS,
    ':': TerrainType.SAND,
    'T': TerrainType.FOREST,
    '~': TerrainType.WATER,
    '#': TerrainType.MOUNTAIN,
    '=': TerrainType.BRIDGE,
    'n': TerrainType.MOUNTAIN_PASS,
}


def make_grid(*rows):
    """Build a (height, width) uint8 grid from text rows"""
    return np.array([[GLYPHS[c] for c in row] for row in rows], dtype=np.uint8)


def assert_well_formed(path, grid, start, goal):
    assert path[0] == start
    assert path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert is_adjacent(a, b)
    for x, y in path:
        assert grid[y, x] not in (TerrainType.WATER, TerrainType.MOUNTAIN)


# ==================== Pathfinder ====================

class TestGridPathfinder:

    def test_open_grid_shortest_path(self):
        grid = make_grid(*['.....'] * 5)
        path = find_path(grid, 0, 0, 4, 4)
        assert len(path) == 9
        assert_well_formed(path, grid, (0, 0), (4, 4))

    def test_routes_through_gap(self):
        grid = make_grid(
            '.#...',
            '.#.#.',
            '.#.#.',
            '...#.',
        )
        path = find_path(grid, 0, 0, 4, 0)
        assert_well_formed(path, grid, (0, 0), (4, 0))
        assert (1, 3) in path and (3, 0) in path
        assert len(path) == 11

    def test_crosses_bridge_and_pass(self):
        grid = make_grid(
            '.....',
            '~~=~~',
            '##n##',
            '.....',
        )
        path = find_path(grid, 0, 0, 4, 3)
        assert_well_formed(path, grid, (0, 0), (4, 3))
        assert (2, 1) in path and (2, 2) in path

    def test_forest_and_sand_are_walkable(self):
        grid = make_grid('.T:T.')
        assert find_path(grid, 0, 0, 4, 0) == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]

    def test_unreachable_returns_empty(self):
        grid = make_grid(
            '..#..',
            '..#..',
            '..#..',
        )
        planner = GridPathfinder(grid)
        assert planner.plan((0, 0), (4, 2)) == []
        assert planner.last_stats.reason == 'no_path_found'
        assert not planner.last_stats.success

    def test_blocked_or_outside_endpoints(self):
        grid = make_grid('.#.', '...')
        planner = GridPathfinder(grid)
        assert planner.plan((1, 0), (2, 1)) == []
        assert planner.last_stats.reason == 'invalid_start'
        assert planner.plan((0, 0), (5, 5)) == []
        assert planner.last_stats.reason == 'invalid_goal'

    def test_start_equals_goal(self):
        grid = make_grid('...', '...')
        assert find_path(grid, 1, 1, 1, 1) == [(1, 1)]

    def test_expansion_budget(self):
        grid = make_grid(*['.' * 20] * 20)
        planner = GridPathfinder(grid, max_expansions=5)
        assert planner.plan((0, 0), (19, 19)) == []
        assert planner.last_stats.reason == 'max_expansions'
        assert planner.last_stats.nodes_expanded == 5

        unlimited = GridPathfinder(grid)
        path = unlimited.plan((0, 0), (19, 19))
        assert len(path) == 39
        assert unlimited.last_stats.success
        assert unlimited.last_stats.path_length == 39

    def test_accepts_read_only_grid(self):
        grid = make_grid(*['....'] * 4)
        grid.flags.writeable = False
        assert find_path(grid, 0, 0, 3, 3)

    def test_generated_map_path(self):
        m = generate_map(48, 32, seed="planner")
        path = find_path(m.grid, *m.start, *m.goal)
        assert_well_formed(path, m.grid, m.start, m.goal)
        manhattan = abs(m.goal_x - m.start_x) + abs(m.goal_y - m.start_y)
        assert len(path) >= manhattan + 1


# ==================== Regions ====================

class TestRegions:

    def test_label_regions(self):
        grid = make_grid(
            '..#..',
            '..#..',
            '#####',
            '.....',
        )
        labels, count = label_regions(grid)
        assert count == 3
        assert labels[2, 0] == 0
        assert same_region(grid, (0, 0), (1, 1))
        assert not same_region(grid, (0, 0), (4, 0))
        assert not same_region(grid, (0, 0), (0, 3))

        sizes = region_sizes(grid)
        assert sizes[0] == 7
        assert sorted(sizes[1:].tolist()) == [4, 4, 5]

    def test_diagonal_is_not_connected(self):
        grid = make_grid('.#', '#.')
        assert label_regions(grid)[1] == 2
        assert find_path(grid, 0, 0, 1, 1) == []


# ==================== Route multiplicity ====================

class TestMultipleRoutes:

    def test_open_field_has_alternatives(self):
        grid = make_grid(*['.....'] * 5)
        before = grid.copy()
        assert has_multiple_routes(grid, 0, 2, 4, 2)
        assert np.array_equal(grid, before)

    def test_chokepoint(self):
        grid = make_grid(
            '..#..',
            '..#..',
            '.....',
            '..#..',
            '..#..',
        )
        assert find_path(grid, 0, 2, 4, 2)
        assert not has_multiple_routes(grid, 0, 2, 4, 2)

    def test_boundary_midpoint(self):
        grid = make_grid(*['.....'] * 5)
        # Straight route along the top row has its midpoint on the boundary
        assert not has_multiple_routes(grid, 0, 0, 4, 0)

    def test_no_path(self):
        grid = make_grid('.#.', '.#.', '.#.')
        assert not has_multiple_routes(grid, 0, 1, 2, 1)

    def test_generated_map_is_not_mutated(self):
        m = generate_map(32, 32, seed="routes")
        before = m.grid.copy()
        result = has_multiple_routes(m.grid, *m.start, *m.goal)
        assert isinstance(result, bool)
        assert np.array_equal(m.grid, before)

    def test_mutable_grid_is_not_mutated(self):
        m = generate_map(20, 20, seed="copy")
        grid = np.array(m.grid)
        before = grid.copy()
        has_multiple_routes(grid, *m.start, *m.goal)
        assert np.array_equal(grid, before)


# ==================== Connectivity ====================

def blocked_grid(width, height):
    return np.full((height, width), TerrainType.MOUNTAIN, dtype=np.uint8)


class TestConnectivity:

    def test_boundary_cells_order(self):
        xs, ys = boundary_cells(3, 3)
        cells = list(zip(xs.tolist(), ys.tolist()))
        assert cells[:6] == [(0, 0), (0, 2), (1, 0), (1, 2), (2, 0), (2, 2)]
        assert cells[6:] == [(0, 1), (2, 1)]

        xs, ys = boundary_cells(7, 4)
        assert len(xs) == 2 * 7 + 2 * (4 - 2)

    def test_normalize_edges(self):
        grid = blocked_grid(6, 5)
        enforcer = ConnectivityEnforcer(SeededRandom("edges"))
        assert enforcer.normalize_edges(grid) == 2 * 6 + 2 * 3
        assert (grid[0] == TerrainType.GRASS).all()
        assert (grid[:, -1] == TerrainType.GRASS).all()
        assert (grid[1:-1, 1:-1] == TerrainType.MOUNTAIN).all()

    def test_start_is_walkable_boundary(self):
        grid = blocked_grid(6, 6)
        grid[0, 3] = TerrainType.SAND
        enforcer = ConnectivityEnforcer(SeededRandom("start"))
        assert enforcer.select_start(grid) == (3, 0)

    def test_goal_tie_break_is_scan_order(self):
        grid = make_grid('...', '...', '...')
        enforcer = ConnectivityEnforcer(
            SeededRandom("goal"), ConnectivityConfig(scan_chunk_cells=1)
        )
        # (0, 2) and (2, 2) are equally far from (1, 0)
        assert enforcer.select_goal(grid, (1, 0)) == (0, 2)

    def test_goal_skips_blocked_cells(self):
        grid = make_grid(
            '....',
            '....',
            '...#',
        )
        enforcer = ConnectivityEnforcer(SeededRandom("goal"))
        # (3, 2) is farthest but blocked; (3, 1) beats (2, 2)
        assert enforcer.select_goal(grid, (0, 0)) == (3, 1)

    def test_carve_staircase(self):
        grid = blocked_grid(6, 6)
        converted = carve_staircase(grid, (0, 0), (5, 3))
        assert converted == 1 + 5 + 3
        assert find_path(grid, 0, 0, 5, 3)

        # Carving again converts nothing
        assert carve_staircase(grid, (0, 0), (5, 3)) == 0

    @pytest.mark.parametrize("policy", ['fixed', 'reselect'])
    def test_repair_connects_isolated_corners(self, policy, monkeypatch):
        grid = blocked_grid(10, 10)
        grid[0, 0] = TerrainType.GRASS
        grid[9, 9] = TerrainType.GRASS

        enforcer = ConnectivityEnforcer(
            SeededRandom("repair"), ConnectivityConfig(repair_policy=policy)
        )
        monkeypatch.setattr(enforcer, 'normalize_edges', lambda g: 0)

        report = enforcer.enforce(grid)
        assert report.connected
        assert report.attempts == 1
        assert report.reason == 'repaired'
        assert find_path(grid, *report.start, *report.goal)
        assert enforcer.last_path[0] == report.start

    def test_gives_up_after_budget(self, monkeypatch):
        grid = blocked_grid(10, 10)
        grid[0, 0] = TerrainType.GRASS
        grid[9, 9] = TerrainType.GRASS

        enforcer = ConnectivityEnforcer(
            SeededRandom("give-up"), ConnectivityConfig(max_repair_attempts=0)
        )
        monkeypatch.setattr(enforcer, 'normalize_edges', lambda g: 0)

        report = enforcer.enforce(grid)
        assert not report.connected
        assert report.attempts == 0
        assert report.path_length == 0
        assert enforcer.last_path == []

    def test_open_grid_needs_no_repair(self):
        grid = make_grid(*['......'] * 6)
        report = ConnectivityEnforcer(SeededRandom("open")).enforce(grid)
        assert report.connected
        assert report.attempts == 0
        assert report.reason == 'connected'
        assert report.path_length >= 2
