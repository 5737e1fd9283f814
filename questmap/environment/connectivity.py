"""
Connectivity Module
===================

Edge normalization, start/goal selection, path validation and
emergency route repair.
"""

import logging
import numpy as np
import structlog
from typing import Tuple, List, Optional
from dataclasses import dataclass

from ..config import ConnectivityConfig, PlannerConfig
from ..terrain import TerrainType, TerrainProperties, SeededRandom
from ..planning import GridPathfinder, same_region

# Routed through stdlib logging so unconfigured callers see warnings only
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


@dataclass
class ConnectivityReport:
    """Outcome of a connectivity pass"""
    start: Tuple[int, int] = (0, 0)
    goal: Tuple[int, int] = (0, 0)
    connected: bool = False
    attempts: int = 0  # repair carves performed
    path_length: int = 0
    reason: str = ''


def boundary_cells(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Boundary coordinates in selection order.

    Top/bottom pairs for x = 0..width-1, then left/right pairs for
    y = 1..height-2.
    """
    xs_tb = np.repeat(np.arange(width), 2)
    ys_tb = np.tile(np.array([0, height - 1]), width)

    inner = np.arange(1, height - 1)
    xs_lr = np.tile(np.array([0, width - 1]), len(inner))
    ys_lr = np.repeat(inner, 2)

    return np.concatenate([xs_tb, xs_lr]), np.concatenate([ys_tb, ys_lr])


def carve_staircase(grid: np.ndarray, start: Tuple[int, int], goal: Tuple[int, int]) -> int:
    """
    Force a 4-connected staircase from start to goal to be walkable.

    Each iteration steps x one cell toward the goal, then y one cell,
    turning any impassable cell visited into grass.

    Returns:
        Number of cells converted
    """
    x, y = start
    gx, gy = goal
    converted = 0

    def force(cx, cy):
        if not TerrainProperties.WALKABLE_LUT[grid[cy, cx]]:
            grid[cy, cx] = TerrainType.GRASS
            return 1
        return 0

    converted += force(x, y)
    while (x, y) != (gx, gy):
        if x != gx:
            x += 1 if gx > x else -1
            converted += force(x, y)
        if y != gy:
            y += 1 if gy > y else -1
            converted += force(x, y)
    return converted


class ConnectivityEnforcer:
    """
    Guarantees, within a bounded number of repairs, that the selected
    start and goal are joined by a walkable path.

    Pipeline:
    1. Edge normalization (impassable boundary cells become grass)
    2. Start selection (random walkable boundary cell)
    3. Goal selection (walkable cell farthest from start)
    4. Validation (region pre-check, then A*)
    5. Repair loop (staircase carve, then revalidate)
    """

    def __init__(self,
                 rng: SeededRandom,
                 config: Optional[ConnectivityConfig] = None,
                 planner_config: Optional[PlannerConfig] = None):
        self.rng = rng
        self.config = config or ConnectivityConfig()
        self.planner_config = planner_config or PlannerConfig()

        # Last validated path, empty when disconnected
        self.last_path: List[Tuple[int, int]] = []
        self._last_planner_reason = ''

    def enforce(self, grid: np.ndarray) -> ConnectivityReport:
        """Run the full pass in place on grid"""
        report = ConnectivityReport()

        start, goal = self._select_endpoints(grid)
        report.start, report.goal = start, goal
        path = self.validate(grid, start, goal)

        while not path and report.attempts < self.config.max_repair_attempts:
            report.attempts += 1
            converted = carve_staircase(grid, start, goal)
            logger.info(
                "connectivity_repair",
                attempt=report.attempts, start=start, goal=goal, converted=converted,
            )

            if self.config.repair_policy == 'reselect':
                start, goal = self._select_endpoints(grid)
                report.start, report.goal = start, goal
            else:
                self.normalize_edges(grid)
            path = self.validate(grid, start, goal)

        report.connected = bool(path)
        report.path_length = len(path)
        self.last_path = path

        if report.connected:
            report.reason = 'connected' if report.attempts == 0 else 'repaired'
        else:
            report.reason = self._last_planner_reason or 'no_path_found'
            logger.warning(
                "connectivity_not_guaranteed",
                start=report.start, goal=report.goal,
                attempts=report.attempts, reason=report.reason,
            )
        return report

    def _select_endpoints(self, grid: np.ndarray) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        self.normalize_edges(grid)
        start = self.select_start(grid)
        goal = self.select_goal(grid, start)
        return start, goal

    # ==================== Steps ====================

    def normalize_edges(self, grid: np.ndarray) -> int:
        """Turn impassable boundary cells into grass, return count changed"""
        changed = 0
        lut = TerrainProperties.WALKABLE_LUT
        for edge in (grid[0, :], grid[-1, :], grid[:, 0], grid[:, -1]):
            blocked = ~lut[edge]
            n = int(blocked.sum())
            if n:
                edge[blocked] = TerrainType.GRASS
                changed += n
        return changed

    def select_start(self, grid: np.ndarray) -> Tuple[int, int]:
        """Pick a walkable boundary cell uniformly from the stream"""
        height, width = grid.shape
        xs, ys = boundary_cells(width, height)
        keep = TerrainProperties.WALKABLE_LUT[grid[ys, xs]]
        xs, ys = xs[keep], ys[keep]

        i = self.rng.choice_index(len(xs))
        return (int(xs[i]), int(ys[i]))

    def select_goal(self, grid: np.ndarray, start: Tuple[int, int]) -> Tuple[int, int]:
        """
        Walkable cell farthest from start (Euclidean).

        Ties go to the first cell in row-major order. Falls back to start
        when nothing else is walkable.
        """
        height, width = grid.shape
        sx, sy = start
        lut = TerrainProperties.WALKABLE_LUT
        rows_per_chunk = max(1, self.config.scan_chunk_cells // width)

        dx2 = (np.arange(width, dtype=np.int64) - sx) ** 2
        best_d2 = 0
        best = start

        for y0 in range(0, height, rows_per_chunk):
            y1 = min(height, y0 + rows_per_chunk)
            dy2 = (np.arange(y0, y1, dtype=np.int64) - sy) ** 2
            d2 = dy2[:, None] + dx2[None, :]
            d2[~lut[grid[y0:y1]]] = -1

            # argmax returns the first maximum in row-major order
            k = int(np.argmax(d2))
            if d2.flat[k] > best_d2:
                best_d2 = int(d2.flat[k])
                ky, kx = divmod(k, width)
                best = (kx, y0 + ky)

        return best

    def validate(self, grid: np.ndarray,
                 start: Tuple[int, int], goal: Tuple[int, int]) -> List[Tuple[int, int]]:
        """Return a start-to-goal path, or empty list if none"""
        self._last_planner_reason = ''
        if self.config.use_region_precheck and not same_region(grid, start, goal):
            self._last_planner_reason = 'no_path_found'
            return []

        planner = GridPathfinder(grid, max_expansions=self.planner_config.max_expansions)
        path = planner.plan(start, goal)
        self._last_planner_reason = planner.last_stats.reason
        return path
