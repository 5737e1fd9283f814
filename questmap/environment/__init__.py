"""
Environment Module
==================

Finished map representation and the connectivity pass that produces it.
"""

from .world import MapData
from .connectivity import (
    ConnectivityEnforcer,
    ConnectivityReport,
    boundary_cells,
    carve_staircase,
)

__all__ = [
    'MapData',
    'ConnectivityEnforcer',
    'ConnectivityReport',
    'boundary_cells',
    'carve_staircase',
]
