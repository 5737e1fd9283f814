"""
Terrain Types Module
====================

Defines terrain type enumeration and utilities.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

import numpy as np


class TerrainType(IntEnum):
    """
    Terrain type enumeration.

    Values are integers for efficient numpy array storage.
    """
    GRASS = 0
    WATER = 1
    MOUNTAIN = 2
    SAND = 3
    FOREST = 4
    BRIDGE = 5
    MOUNTAIN_PASS = 6

    @classmethod
    def from_name(cls, name: str) -> 'TerrainType':
        """Get terrain type from string name"""
        return cls[name.upper()]

    @property
    def name_lower(self) -> str:
        """Get lowercase name"""
        return self.name.lower()

    def is_walkable(self) -> bool:
        """Check if terrain can be entered"""
        return TerrainProperties.WALKABLE[self]

    @classmethod
    def walkable_types(cls) -> tuple:
        """Get all walkable terrain types"""
        return (cls.GRASS, cls.SAND, cls.FOREST, cls.BRIDGE, cls.MOUNTAIN_PASS)

    @classmethod
    def get_glyphs(cls) -> Dict['TerrainType', str]:
        """Get single-character symbols for text dumps"""
        return {
            cls.GRASS: '.',
            cls.WATER: '~',
            cls.MOUNTAIN: '^',
            cls.SAND: ':',
            cls.FOREST: 'T',
            cls.BRIDGE: '=',
            cls.MOUNTAIN_PASS: 'n',
        }


@dataclass(frozen=True)
class TerrainConfig:
    """Per-terrain attributes consumed by movement validation"""
    type: TerrainType
    walkable: bool
    movement_speed: float


class TerrainProperties:
    """
    Static terrain properties lookup.

    Provides fast access to terrain-specific parameters.
    """

    WALKABLE = {
        TerrainType.GRASS: True,
        TerrainType.WATER: False,
        TerrainType.MOUNTAIN: False,
        TerrainType.SAND: True,
        TerrainType.FOREST: True,
        TerrainType.BRIDGE: True,
        TerrainType.MOUNTAIN_PASS: True,
    }

    # Fraction of full speed; impassable terrain is never entered
    MOVEMENT_SPEED = {
        TerrainType.GRASS: 1.0,
        TerrainType.WATER: 0.0,
        TerrainType.MOUNTAIN: 0.0,
        TerrainType.SAND: 0.7,
        TerrainType.FOREST: 0.6,
        TerrainType.BRIDGE: 0.9,
        TerrainType.MOUNTAIN_PASS: 0.5,
    }

    # Indexed by raw uint8 terrain value (WALKABLE is keyed in value order)
    WALKABLE_LUT = np.array(list(WALKABLE.values()), dtype=bool)

    @classmethod
    def get_config(cls, terrain_type: TerrainType) -> TerrainConfig:
        """Get the full config record for a terrain type"""
        terrain_type = TerrainType(terrain_type)
        return TerrainConfig(
            type=terrain_type,
            walkable=cls.WALKABLE[terrain_type],
            movement_speed=cls.MOVEMENT_SPEED[terrain_type],
        )

    @classmethod
    def walkable_mask(cls, grid: np.ndarray) -> np.ndarray:
        """Boolean mask of walkable cells, same shape as grid"""
        return cls.WALKABLE_LUT[grid]


def get_terrain_config(terrain_type: TerrainType) -> TerrainConfig:
    """Pure lookup of walkability and movement speed for a terrain type"""
    return TerrainProperties.get_config(terrain_type)
