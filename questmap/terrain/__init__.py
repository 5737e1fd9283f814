"""
Terrain Module
==============

Terrain types, seeded randomness, and procedural grid synthesis.
"""

from .types import TerrainType, TerrainConfig, TerrainProperties, get_terrain_config
from .rng import SeededRandom, seed_to_int
from .generator import TerrainSynthesizer
from .features import FeatureGenerator

__all__ = [
    'TerrainType',
    'TerrainConfig',
    'TerrainProperties',
    'get_terrain_config',
    'SeededRandom',
    'seed_to_int',
    'TerrainSynthesizer',
    'FeatureGenerator',
]
