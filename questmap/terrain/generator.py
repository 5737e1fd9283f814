"""
Terrain Generator Module
========================

Base terrain layer synthesis.
Single Responsibility: Only assigns the base terrain type of every cell.
"""

import numpy as np
from typing import Optional

from .types import TerrainType
from .rng import SeededRandom
from ..config import GenerationConfig


# Terrain order matching GenerationConfig.terrain_thresholds
BASE_TERRAIN_ORDER = np.array([
    TerrainType.GRASS,
    TerrainType.SAND,
    TerrainType.FOREST,
    TerrainType.WATER,
    TerrainType.MOUNTAIN,
], dtype=np.uint8)


class TerrainSynthesizer:
    """
    Base terrain synthesizer.

    Draws one value per cell in row-major order and maps it through the
    cumulative thresholds. Rows are drawn in chunks so very large grids
    never need a full-size float buffer.
    """

    def __init__(self, rng: SeededRandom, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self.rng = rng
        self._thresholds = np.asarray(self.config.terrain_thresholds, dtype=np.float64)
        if len(self._thresholds) != len(BASE_TERRAIN_ORDER) - 1:
            raise ValueError("terrain_thresholds must define 4 cumulative cut points")

    def generate(self, width: int, height: int) -> np.ndarray:
        """Generate base terrain grid of shape (height, width)"""
        grid = np.empty((height, width), dtype=np.uint8)
        flat = grid.ravel()
        rows_per_chunk = max(1, self.config.draw_chunk_cells // width)

        for y0 in range(0, height, rows_per_chunk):
            y1 = min(height, y0 + rows_per_chunk)
            draws = self.rng.random_array((y1 - y0) * width)
            flat[y0 * width:y1 * width] = self.classify(draws)

        return grid

    def classify(self, draws: np.ndarray) -> np.ndarray:
        """Map draws in [0, 1) to terrain values"""
        # side='right' counts thresholds <= r, so r < 0.40 lands on index 0
        idx = np.searchsorted(self._thresholds, draws, side='right')
        return BASE_TERRAIN_ORDER[idx]
