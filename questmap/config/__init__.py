"""
Configuration Module
====================

Centralized configuration management for map generation.
"""

from .settings import (
    Config,
    GenerationConfig,
    RiverConfig,
    MountainConfig,
    ForestConfig,
    ConnectivityConfig,
    PlannerConfig,
    MapSizeConfig,
    InvalidMapSizeError,
)

__all__ = [
    'Config',
    'GenerationConfig',
    'RiverConfig',
    'MountainConfig',
    'ForestConfig',
    'ConnectivityConfig',
    'PlannerConfig',
    'MapSizeConfig',
    'InvalidMapSizeError',
]
