"""
Pipeline Module
===============

Map generation facade and batch runner.
"""

from .runner import (
    MapGenerator,
    BatchSummary,
    generate_map,
    generate_seed,
    has_multiple_routes,
)

__all__ = [
    'MapGenerator',
    'BatchSummary',
    'generate_map',
    'generate_seed',
    'has_multiple_routes',
]
