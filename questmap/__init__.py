"""
QuestMap - Procedural Tile Maps
===============================

Deterministic tile-map synthesis for a top-down movement game, with a
walkable route guaranteed between start and goal.

Key Features:
- Seeded, reproducible generation from a string seed
- Layered features: rivers with bridges, mountain ranges with passes,
  forest clusters
- Start/goal selection with connectivity validation and repair
- Dense-array A* that scales to 10,000 x 10,000 grids
- Route-multiplicity queries that never touch the caller's grid

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import Config, InvalidMapSizeError
from .terrain import TerrainType, TerrainConfig, get_terrain_config, SeededRandom
from .environment import MapData, ConnectivityEnforcer
from .planning import GridPathfinder, find_path
from .pipeline import MapGenerator, generate_map, has_multiple_routes

__all__ = [
    'Config', 'InvalidMapSizeError',
    'TerrainType', 'TerrainConfig', 'get_terrain_config', 'SeededRandom',
    'MapData', 'ConnectivityEnforcer',
    'GridPathfinder', 'find_path',
    'MapGenerator', 'generate_map', 'has_multiple_routes',
]
