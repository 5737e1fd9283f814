"""
A* Planner Module
=================

Uniform-cost A* over the walkable cells of a flat tile grid.
"""

import heapq
import logging
from array import array

import numpy as np
import structlog
from typing import Tuple, List, Optional
from dataclasses import dataclass

from ..terrain import TerrainProperties

# Routed through stdlib logging so unconfigured callers see warnings only
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


@dataclass
class PlannerStats:
    """Statistics from a planning run"""
    iterations: int = 0
    nodes_expanded: int = 0
    path_length: int = 0
    success: bool = False
    reason: str = ''


class GridPathfinder:
    """
    A* pathfinder on a 4-connected grid.

    Every step costs 1 regardless of terrain, so the Manhattan distance
    is an admissible heuristic. Bookkeeping uses dense arrays indexed by
    y * width + x:
    - walkable, closed: bytearray flags, O(1) membership
    - g_score: int32 best known cost
    - came_from: int32 parent index, -1 for none
    The open set is a binary heap with O(log n) extraction.
    """

    def __init__(self, grid: np.ndarray, max_expansions: Optional[int] = None):
        """
        Initialize pathfinder.

        Args:
            grid: Terrain grid of shape (height, width)
            max_expansions: Maximum node expansions (None for unlimited)
        """
        self.height, self.width = grid.shape
        self.walkable = bytearray(TerrainProperties.walkable_mask(grid).tobytes())
        self.max_expansions = max_expansions

        # Last planning stats
        self.last_stats: Optional[PlannerStats] = None

    def is_valid(self, x: int, y: int) -> bool:
        """Check if cell is in bounds and walkable"""
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False
        return bool(self.walkable[y * self.width + x])

    def plan(self, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Tuple[int, int]]:
        """
        Find path from start to goal.

        Args:
            start: Start position (x, y)
            goal: Goal position (x, y)

        Returns:
            Path as list of (x, y) positions, or empty list if no path found
        """
        stats = PlannerStats()
        self.last_stats = stats
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        if not self.is_valid(*start):
            stats.reason = 'invalid_start'
            return []
        if not self.is_valid(*goal):
            stats.reason = 'invalid_goal'
            return []

        width = self.width
        walkable = self.walkable
        n = width * self.height
        start_idx = start[1] * width + start[0]
        goal_idx = goal[1] * width + goal[0]
        gx, gy = goal

        closed = bytearray(n)
        g_score = array('i', [-1]) * n
        came_from = array('i', [-1]) * n

        g_score[start_idx] = 0
        # (f, h, tie, index): lower h first on equal f, then insertion order
        counter = 0
        h0 = abs(start[0] - gx) + abs(start[1] - gy)
        open_set = [(h0, h0, counter, start_idx)]

        budget = self.max_expansions
        iterations = 0

        while open_set:
            if budget is not None and stats.nodes_expanded >= budget:
                stats.iterations = iterations
                stats.reason = 'max_expansions'
                logger.warning(
                    "search_budget_exhausted",
                    start=start, goal=goal, max_expansions=budget,
                )
                return []

            iterations += 1
            _, _, _, current = heapq.heappop(open_set)

            if closed[current]:
                continue
            closed[current] = 1
            stats.nodes_expanded += 1

            if current == goal_idx:
                path = self._reconstruct_path(came_from, current)
                stats.iterations = iterations
                stats.path_length = len(path)
                stats.success = True
                stats.reason = 'success'
                return path

            cy, cx = divmod(current, width)
            next_g = g_score[current] + 1

            for neighbor, nx, ny in self._get_neighbors(current, cx, cy):
                if closed[neighbor] or not walkable[neighbor]:
                    continue
                old_g = g_score[neighbor]
                if old_g < 0 or next_g < old_g:
                    g_score[neighbor] = next_g
                    came_from[neighbor] = current
                    h = abs(nx - gx) + abs(ny - gy)
                    counter += 1
                    heapq.heappush(open_set, (next_g + h, h, counter, neighbor))

        stats.iterations = iterations
        stats.reason = 'no_path_found'
        return []

    def _get_neighbors(self, idx: int, x: int, y: int):
        """Get in-bounds 4-connected neighbors as (index, x, y)"""
        width = self.width
        if y > 0:
            yield idx - width, x, y - 1
        if x < width - 1:
            yield idx + 1, x + 1, y
        if y < self.height - 1:
            yield idx + width, x, y + 1
        if x > 0:
            yield idx - 1, x - 1, y

    def _reconstruct_path(self, came_from: array, current: int) -> List[Tuple[int, int]]:
        """Reconstruct path from parent array"""
        width = self.width
        path = []
        while current >= 0:
            y, x = divmod(current, width)
            path.append((x, y))
            current = came_from[current]
        path.reverse()
        return path


def find_path(grid: np.ndarray,
              start_x: int, start_y: int,
              goal_x: int, goal_y: int,
              max_expansions: Optional[int] = None) -> List[Tuple[int, int]]:
    """
    Find a 4-connected path between two cells.

    Returns an ordered list of (x, y) from start to goal inclusive, or an
    empty list when the goal is unreachable, an endpoint is blocked, or
    the expansion budget runs out.
    """
    planner = GridPathfinder(grid, max_expansions=max_expansions)
    return planner.plan((start_x, start_y), (goal_x, goal_y))


def is_adjacent(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """Check 4-connected adjacency"""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
