"""
Feature Generator Module
========================

Layers rivers, mountain ranges and forest clusters onto a base grid.
"""

import numpy as np
from typing import Optional

from .types import TerrainType
from .rng import SeededRandom
from ..config import GenerationConfig


# Cardinal steps: up, right, down, left
DIRECTIONS = ((0, -1), (1, 0), (0, 1), (-1, 0))


def _clamp(value: int, lo: int, hi: int) -> int:
    return lo if value < lo else hi if value > hi else value


class FeatureGenerator:
    """
    Procedural feature placement on a flat grid.

    Passes run in a fixed order, rivers then mountain ranges then
    forest clusters, and later passes may overwrite earlier ones.
    All writes go through flat indices (y * width + x).
    """

    def __init__(self, rng: SeededRandom, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()
        self.rng = rng

    def apply(self, grid: np.ndarray) -> np.ndarray:
        """Apply all feature passes in place and return grid"""
        self.add_rivers(grid)
        self.add_mountain_ranges(grid)
        self.add_forest_clusters(grid)
        return grid

    def add_rivers(self, grid: np.ndarray):
        """Biased downward walks from the top row"""
        cfg = self.config.rivers
        height, width = grid.shape
        flat = grid.ravel()

        for _ in range(self.rng.randint(*cfg.count)):
            x = self.rng.choice_index(width)
            y = 0
            steps = 0
            while y < height and steps < height + cfg.extra_steps:
                if self.rng.next() < cfg.bridge_probability:
                    flat[y * width + x] = TerrainType.BRIDGE
                else:
                    flat[y * width + x] = TerrainType.WATER

                y += 1
                if self.rng.next() < cfg.shift_probability:
                    dx = -1 if self.rng.next() < 0.5 else 1
                    x = _clamp(x + dx, 0, width - 1)
                steps += 1

    def add_mountain_ranges(self, grid: np.ndarray):
        """Short undirected random walks"""
        cfg = self.config.mountains
        height, width = grid.shape
        flat = grid.ravel()

        for _ in range(self.rng.randint(*cfg.count)):
            x = self.rng.choice_index(width)
            y = self.rng.choice_index(height)
            length = self.rng.randint(*cfg.length)

            self._paint_mountain(flat, y * width + x)
            for _ in range(length):
                dx, dy = DIRECTIONS[self.rng.choice_index(4)]
                x = _clamp(x + dx, 0, width - 1)
                y = _clamp(y + dy, 0, height - 1)
                self._paint_mountain(flat, y * width + x)

    def _paint_mountain(self, flat: np.ndarray, idx: int):
        if self.rng.next() < self.config.mountains.pass_probability:
            flat[idx] = TerrainType.MOUNTAIN_PASS
        else:
            flat[idx] = TerrainType.MOUNTAIN

    def add_forest_clusters(self, grid: np.ndarray):
        """Disc-shaped clusters that only replace grass or sand"""
        cfg = self.config.forests
        height, width = grid.shape
        flat = grid.ravel()
        convertible = (TerrainType.GRASS, TerrainType.SAND)

        for _ in range(self.rng.randint(*cfg.count)):
            cx = self.rng.choice_index(width)
            cy = self.rng.choice_index(height)
            radius = self.rng.randint(*cfg.radius)
            r2 = radius * radius

            for dy in range(-radius, radius + 1):
                y = cy + dy
                if y < 0 or y >= height:
                    continue
                for dx in range(-radius, radius + 1):
                    x = cx + dx
                    if x < 0 or x >= width or dx * dx + dy * dy > r2:
                        continue
                    if self.rng.next() < cfg.fill_probability:
                        idx = y * width + x
                        if flat[idx] in convertible:
                            flat[idx] = TerrainType.FOREST
