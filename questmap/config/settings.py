"""
Configuration Settings Module
==============================

Dataclass-based configuration with validation and defaults.
Follows Single Responsibility Principle - only handles configuration.
"""

import numbers
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Tuple


class InvalidMapSizeError(ValueError):
    """Raised when requested map dimensions cannot hold a valid boundary"""


@dataclass
class RiverConfig:
    """River feature parameters"""
    count: Tuple[int, int] = (1, 2)  # min, max (inclusive)
    shift_probability: float = 0.3
    bridge_probability: float = 0.15
    extra_steps: int = 5  # walk stops after height + extra_steps


@dataclass
class MountainConfig:
    """Mountain range feature parameters"""
    count: Tuple[int, int] = (1, 2)
    length: Tuple[int, int] = (3, 7)
    pass_probability: float = 0.20


@dataclass
class ForestConfig:
    """Forest cluster feature parameters"""
    count: Tuple[int, int] = (2, 4)
    radius: Tuple[int, int] = (2, 4)
    fill_probability: float = 0.7


@dataclass
class GenerationConfig:
    """Base terrain and feature generation configuration"""
    # Cumulative thresholds: grass, sand, forest, water (remainder is mountain)
    terrain_thresholds: Tuple[float, ...] = (0.40, 0.60, 0.75, 0.85)

    # Base terrain is drawn in chunks of whole rows of at most this many cells
    draw_chunk_cells: int = 1 << 20

    rivers: RiverConfig = field(default_factory=RiverConfig)
    mountains: MountainConfig = field(default_factory=MountainConfig)
    forests: ForestConfig = field(default_factory=ForestConfig)


@dataclass
class ConnectivityConfig:
    """Start/goal selection and repair configuration"""
    max_repair_attempts: int = 10
    repair_policy: str = 'fixed'  # 'fixed' or 'reselect'
    use_region_precheck: bool = True

    # Goal selection scans rows in chunks of at most this many cells
    scan_chunk_cells: int = 1 << 20

    def __post_init__(self):
        if self.repair_policy not in ('fixed', 'reselect'):
            raise ValueError(f"Unknown repair policy: {self.repair_policy!r}")


@dataclass
class PlannerConfig:
    """Pathfinder configuration"""
    max_expansions: Optional[int] = None  # None for unlimited


@dataclass
class MapSizeConfig:
    """Named map size preset"""
    name: str
    width: int
    height: int
    display_name: str = ''

    def __post_init__(self):
        if not self.display_name:
            self.display_name = f"{self.name.replace('_', ' ').title()} ({self.width}x{self.height})"

    @property
    def max_dimension(self) -> int:
        return max(self.width, self.height)

    @property
    def is_large(self) -> bool:
        """Maps above 50 cells per side are treated as large"""
        return self.max_dimension > 50

    @classmethod
    def custom(cls, width: int, height: int, max_size: int = 10000) -> 'MapSizeConfig':
        """Create a custom preset, clamping each side to max_size"""
        width = min(width, max_size)
        height = min(height, max_size)
        return cls(name=f'custom_{width}x{height}', width=width, height=height,
                   display_name=f'Custom {width}x{height}')


def _default_map_sizes() -> Dict[str, MapSizeConfig]:
    presets = [
        MapSizeConfig('tiny', 8, 8, 'Tiny (8x8)'),
        MapSizeConfig('small', 12, 12, 'Small (12x12)'),
        MapSizeConfig('medium', 16, 16, 'Medium (16x16)'),
        MapSizeConfig('large', 20, 20, 'Large (20x20)'),
        MapSizeConfig('huge', 50, 50, 'Huge (50x50)'),
        MapSizeConfig('massive', 100, 100, 'Massive (100x100)'),
        MapSizeConfig('gigantic', 200, 200, 'Gigantic (200x200)'),
        MapSizeConfig('custom_1000', 1000, 1000, 'Custom 1000x1000'),
        MapSizeConfig('custom_5000', 5000, 5000, 'Custom 5000x5000'),
        MapSizeConfig('custom_10000', 10000, 10000, 'Custom 10000x10000'),
    ]
    return {p.name: p for p in presets}


@dataclass
class Config:
    """
    Master configuration class combining all sub-configurations.

    Usage:
        config = Config()
        config = Config(connectivity=ConnectivityConfig(repair_policy='reselect'))
    """
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    connectivity: ConnectivityConfig = field(default_factory=ConnectivityConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    map_sizes: Dict[str, MapSizeConfig] = field(default_factory=_default_map_sizes)

    # Global settings
    min_dimension: int = 2
    max_dimension: int = 10000
    verbose: bool = False

    def validate_size(self, width: int, height: int):
        """Reject dimensions that cannot be generated"""
        for label, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidMapSizeError(f"{label} must be an integer, got {value!r}")
            if value < self.min_dimension:
                raise InvalidMapSizeError(
                    f"{label}={value} is below the minimum of {self.min_dimension}"
                )
            if value > self.max_dimension:
                raise InvalidMapSizeError(
                    f"{label}={value} exceeds the maximum of {self.max_dimension}"
                )

    def get_map_size(self, name: str) -> MapSizeConfig:
        """Get map size preset by name (KeyError if unknown)"""
        return self.map_sizes[name]

    def add_custom_map_size(self, width: int, height: int) -> str:
        """Register a clamped custom preset and return its key"""
        preset = MapSizeConfig.custom(width, height, self.max_dimension)
        self.map_sizes[preset.name] = preset
        return preset.name

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Config':
        """Create Config from dictionary"""
        config = cls()
        sections = {
            'generation': GenerationConfig,
            'connectivity': ConnectivityConfig,
            'planner': PlannerConfig,
        }
        for key, value in d.items():
            if not hasattr(config, key):
                continue
            if key in sections and isinstance(value, dict):
                value = _section_from_dict(sections[key], value)
            elif key == 'map_sizes':
                value = {
                    name: v if isinstance(v, MapSizeConfig) else MapSizeConfig(**v)
                    for name, v in value.items()
                }
            setattr(config, key, value)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        from dataclasses import asdict
        return asdict(self)


def _section_from_dict(section_cls, d: Dict[str, Any]):
    nested = {
        'rivers': RiverConfig,
        'mountains': MountainConfig,
        'forests': ForestConfig,
    }
    kwargs = {}
    for key, value in d.items():
        if key in nested and isinstance(value, dict):
            value = nested[key](**value)
        elif isinstance(value, list):
            value = tuple(value)
        kwargs[key] = value
    return section_cls(**kwargs)
