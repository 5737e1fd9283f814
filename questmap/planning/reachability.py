"""
Reachability Module
===================

Connected walkable regions via scipy.ndimage labelling.
"""

import numpy as np
from scipy import ndimage
from typing import Tuple

from ..terrain import TerrainProperties

# 4-connected structuring element, matching the pathfinder
FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)


def walkable_mask(grid: np.ndarray) -> np.ndarray:
    """Boolean mask of walkable cells"""
    return TerrainProperties.walkable_mask(grid)


def label_regions(grid: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Label 4-connected walkable regions.

    Returns:
        (labels, count) where labels has the grid's shape, 0 marks
        impassable cells and regions are numbered from 1
    """
    labels, count = ndimage.label(walkable_mask(grid), structure=FOUR_CONNECTED)
    return labels, int(count)


def same_region(grid: np.ndarray, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    """Check whether two cells lie in the same walkable region"""
    labels, _ = label_regions(grid)
    la = labels[a[1], a[0]]
    return bool(la != 0 and la == labels[b[1], b[0]])


def region_sizes(grid: np.ndarray) -> np.ndarray:
    """Cell count of each region, index 0 is the impassable count"""
    labels, count = label_regions(grid)
    return np.bincount(labels.ravel(), minlength=count + 1)
