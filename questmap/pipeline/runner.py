"""
Pipeline Runner Module
======================

Map generation facade: orchestrates randomness, terrain synthesis,
feature placement and the connectivity pass into one call.
"""

import time
import logging
import numpy as np
import structlog
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field, asdict
from concurrent.futures import ProcessPoolExecutor, as_completed

from ..config import Config
from ..terrain import SeededRandom, TerrainSynthesizer, FeatureGenerator
from ..environment import MapData, ConnectivityEnforcer
from ..planning import find_path, has_multiple_routes as _has_multiple_routes

# Routed through stdlib logging so unconfigured callers see warnings only
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)

SEED_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyz'
SEED_LENGTH = 11


def generate_seed() -> str:
    """Fresh base-36 seed string from OS entropy"""
    digits = np.random.default_rng().integers(0, len(SEED_ALPHABET), SEED_LENGTH)
    return ''.join(SEED_ALPHABET[d] for d in digits)


@dataclass
class BatchSummary:
    """Aggregated results from a batch of generations"""
    width: int = 0
    height: int = 0
    num_maps: int = 0
    seeds: List[str] = field(default_factory=list)
    connected: int = 0
    repaired: int = 0
    total_repair_attempts: int = 0
    mean_runtime_s: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


class MapGenerator:
    """
    Procedural map generator.

    Each call owns a fresh random stream and grid, so independent calls
    (including ones on other processes) share no state.

    Stages:
    1. Base terrain from per-cell draws
    2. Rivers, mountain ranges, forest clusters
    3. Connectivity pass (edges, start, goal, validation, repair)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def generate_map(self, width: int, height: int, seed: Optional[str] = None) -> MapData:
        """
        Generate a complete map.

        Args:
            width: Columns, within [min_dimension, max_dimension]
            height: Rows, within [min_dimension, max_dimension]
            seed: Seed string; generated when omitted and returned in MapData.seed

        Returns:
            Immutable MapData

        Raises:
            InvalidMapSizeError: If the dimensions are out of range
        """
        self.config.validate_size(width, height)
        width, height = int(width), int(height)
        map_seed = seed or generate_seed()

        log = logger.bind(seed=map_seed, width=width, height=height)
        log.debug("map_generation_started")
        t0 = time.perf_counter()

        rng = SeededRandom(map_seed)
        gen_cfg = self.config.generation

        grid = TerrainSynthesizer(rng, gen_cfg).generate(width, height)
        FeatureGenerator(rng, gen_cfg).apply(grid)

        enforcer = ConnectivityEnforcer(rng, self.config.connectivity, self.config.planner)
        report = enforcer.enforce(grid)

        map_data = MapData(
            grid=grid,
            width=width,
            height=height,
            start_x=report.start[0],
            start_y=report.start[1],
            goal_x=report.goal[0],
            goal_y=report.goal[1],
            seed=map_seed,
            connectivity_guaranteed=report.connected,
            repair_attempts=report.attempts,
        )

        emit = log.info if self.config.verbose else log.debug
        emit(
            "map_generated",
            start=map_data.start,
            goal=map_data.goal,
            connected=report.connected,
            repair_attempts=report.attempts,
            path_length=report.path_length,
            draws=rng.call_count,
            runtime_s=round(time.perf_counter() - t0, 4),
        )
        return map_data

    def generate_preset(self, name: str, seed: Optional[str] = None) -> MapData:
        """Generate a map using a named size preset"""
        preset = self.config.get_map_size(name)
        return self.generate_map(preset.width, preset.height, seed)

    def find_path(self, map_data: MapData) -> List:
        """Path between the map's own start and goal"""
        return find_path(map_data.grid, map_data.start_x, map_data.start_y,
                         map_data.goal_x, map_data.goal_y,
                         self.config.planner.max_expansions)

    def has_multiple_routes(self, grid: np.ndarray,
                            start_x: int, start_y: int,
                            goal_x: int, goal_y: int) -> bool:
        """True if blocking the midpoint of a route still leaves a route"""
        return _has_multiple_routes(grid, start_x, start_y, goal_x, goal_y,
                                    max_expansions=self.config.planner.max_expansions)

    def generate_batch(self,
                       seeds: Sequence[str],
                       width: int,
                       height: int,
                       parallel: bool = False,
                       max_workers: int = 4) -> List[MapData]:
        """
        Generate one map per seed.

        Args:
            seeds: Seed strings
            width, height: Map dimensions shared by the batch
            parallel: Use a process pool
            max_workers: Number of parallel workers

        Returns:
            Maps in the same order as seeds
        """
        self.config.validate_size(width, height)
        seeds = list(seeds)

        if not (parallel and max_workers > 1 and len(seeds) > 1):
            return [self.generate_map(width, height, s) for s in seeds]

        results: Dict[int, MapData] = {}
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(self.generate_map, width, height, s): i
                for i, s in enumerate(seeds)
            }
            for future in as_completed(futures):
                i = futures[future]
                try:
                    results[i] = future.result()
                except Exception:
                    logger.error("batch_generation_failed", seed=seeds[i])
                    raise
        return [results[i] for i in range(len(seeds))]

    def summarize(self, maps: Sequence[MapData], elapsed_s: float = 0.0) -> BatchSummary:
        """Aggregate connectivity outcomes of a batch"""
        summary = BatchSummary(num_maps=len(maps))
        if maps:
            summary.width = maps[0].width
            summary.height = maps[0].height
        for m in maps:
            summary.seeds.append(m.seed)
            summary.connected += int(m.connectivity_guaranteed)
            summary.repaired += int(m.repair_attempts > 0)
            summary.total_repair_attempts += m.repair_attempts
        if maps:
            summary.mean_runtime_s = elapsed_s / len(maps)
        return summary


def generate_map(width: int, height: int, seed: Optional[str] = None,
                 config: Optional[Config] = None) -> MapData:
    """Generate a map with the given (or default) configuration"""
    return MapGenerator(config).generate_map(width, height, seed)


def has_multiple_routes(grid: np.ndarray,
                        start_x: int, start_y: int,
                        goal_x: int, goal_y: int) -> bool:
    """Route-multiplicity query that never mutates grid"""
    return _has_multiple_routes(grid, start_x, start_y, goal_x, goal_y)
