"""
Map Data Module
===============

Immutable container for a finished map and its coordinate queries.
"""

import math
import numpy as np
from typing import Tuple, Dict, Any
from dataclasses import dataclass, field

from ..terrain import TerrainType, TerrainProperties, TerrainConfig, get_terrain_config
from ..planning import region_sizes


@dataclass(frozen=True, eq=False)
class MapData:
    """
    Finished map handed to gameplay and rendering layers.

    The grid is stored row-major with shape (height, width) and is made
    read-only on construction. Consumers that track visited or collected
    cells keep that state in their own structures keyed by coordinates.
    """
    grid: np.ndarray
    width: int
    height: int
    start_x: int
    start_y: int
    goal_x: int
    goal_y: int
    seed: str
    connectivity_guaranteed: bool = True
    repair_attempts: int = 0
    _stats: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        if self.grid.shape != (self.height, self.width):
            raise ValueError(
                f"grid shape {self.grid.shape} does not match "
                f"{self.width}x{self.height}"
            )
        self.grid.flags.writeable = False

    def __setstate__(self, state):
        # Unpickled arrays come back writeable
        self.__dict__.update(state)
        self.grid.flags.writeable = False

    def __eq__(self, other):
        if not isinstance(other, MapData):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.start == other.start
            and self.goal == other.goal
            and self.seed == other.seed
            and self.connectivity_guaranteed == other.connectivity_guaranteed
            and self.repair_attempts == other.repair_attempts
            and np.array_equal(self.grid, other.grid)
        )

    # ==================== Property Access ====================

    @property
    def start(self) -> Tuple[int, int]:
        return (self.start_x, self.start_y)

    @property
    def goal(self) -> Tuple[int, int]:
        return (self.goal_x, self.goal_y)

    @property
    def flat(self) -> np.ndarray:
        """Row-major view indexed by y * width + x"""
        return self.grid.ravel()

    # ==================== Cell Queries ====================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if cell is within map bounds"""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """Check if cell is in bounds and walkable"""
        if not self.in_bounds(x, y):
            return False
        return bool(TerrainProperties.WALKABLE_LUT[self.grid[y, x]])

    def terrain_at(self, x: int, y: int) -> TerrainType:
        """Get terrain type at cell"""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} map")
        return TerrainType(int(self.grid[y, x]))

    def terrain_config_at(self, x: int, y: int) -> TerrainConfig:
        return get_terrain_config(self.terrain_at(x, y))

    def is_boundary(self, x: int, y: int) -> bool:
        return x in (0, self.width - 1) or y in (0, self.height - 1)

    # ==================== Statistics ====================

    def get_stats(self) -> Dict[str, Any]:
        """Get map statistics (cached)"""
        if not self._stats:
            self._stats.update(self._compute_stats())
        return self._stats

    def _compute_stats(self) -> Dict[str, Any]:
        """Compute map statistics"""
        total_cells = self.width * self.height
        counts = np.bincount(self.flat, minlength=len(TerrainType))

        terrain_counts = {}
        for t in TerrainType:
            terrain_counts[t.name_lower] = {
                'count': int(counts[t]),
                'percentage': float(counts[t] / total_cells * 100)
            }

        walkable = int(counts[list(TerrainType.walkable_types())].sum())
        sizes = region_sizes(self.grid)

        return {
            'width': self.width,
            'height': self.height,
            'total_cells': total_cells,
            'seed': self.seed,
            'terrain_distribution': terrain_counts,
            'walkable_fraction': walkable / total_cells,
            'walkable_regions': int(len(sizes) - 1),
            'largest_region': int(sizes[1:].max()) if len(sizes) > 1 else 0,
            'start': self.start,
            'goal': self.goal,
            'straight_line_distance': math.hypot(
                self.goal_x - self.start_x, self.goal_y - self.start_y
            ),
            'connectivity_guaranteed': self.connectivity_guaranteed,
            'repair_attempts': self.repair_attempts,
        }

    def render_ascii(self, mark_endpoints: bool = True) -> str:
        """Text dump of the grid, one row per line"""
        glyphs = TerrainType.get_glyphs()
        lut = np.array([glyphs[TerrainType(v)] for v in range(len(TerrainType))])
        rows = lut[self.grid]
        if mark_endpoints:
            rows[self.start_y, self.start_x] = 'S'
            rows[self.goal_y, self.goal_x] = 'G'
        return '\n'.join(''.join(row) for row in rows)
