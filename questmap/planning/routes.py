"""
Route Multiplicity Module
=========================

Detects whether more than one route joins start and goal.
"""

import numpy as np
from typing import List, Optional, Tuple

from .astar import find_path
from ..terrain import TerrainType


def has_multiple_routes(grid: np.ndarray,
                        start_x: int, start_y: int,
                        goal_x: int, goal_y: int,
                        path: Optional[List[Tuple[int, int]]] = None,
                        max_expansions: Optional[int] = None) -> bool:
    """
    Block the midpoint of a known route and search again.

    The midpoint is blocked in a private copy, so the caller's grid is
    never written (read-only grids are accepted).

    Args:
        grid: Terrain grid of shape (height, width)
        start_x, start_y: Start cell
        goal_x, goal_y: Goal cell
        path: Existing start-to-goal path (searched for when omitted)
        max_expansions: Budget for each search

    Returns:
        True if an alternate path avoids the midpoint; False when there is
        no path at all, the midpoint is a boundary cell, or the midpoint
        is a chokepoint
    """
    if path is None:
        path = find_path(grid, start_x, start_y, goal_x, goal_y, max_expansions)
    if not path:
        return False

    height, width = grid.shape
    mid_x, mid_y = path[len(path) // 2]
    if mid_x in (0, width - 1) or mid_y in (0, height - 1):
        return False

    blocked = np.array(grid, dtype=np.uint8, copy=True)
    blocked[mid_y, mid_x] = TerrainType.MOUNTAIN

    alternate = find_path(blocked, start_x, start_y, goal_x, goal_y, max_expansions)
    return len(alternate) > 0
