"""
Planning Module
===============

Grid pathfinding, region labelling and route analysis.
"""

from .astar import GridPathfinder, PlannerStats, find_path, is_adjacent
from .reachability import walkable_mask, label_regions, same_region, region_sizes
from .routes import has_multiple_routes

__all__ = [
    'GridPathfinder',
    'PlannerStats',
    'find_path',
    'is_adjacent',
    'walkable_mask',
    'label_regions',
    'same_region',
    'region_sizes',
    'has_multiple_routes',
]
