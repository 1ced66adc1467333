# landscape/__init__.py
# Landscape configuration, heightfield sampling and persistence

from .config import (
    NoiseVariant, LandscapeConfig, PRESETS, get_preset, load_config, save_config,
)
from .heightfield import (
    plane_grid, sample_points, noise_values, elevation, blend_weights, build_heightfield,
)
from .state import Heightfield, save_npz, load_npz

__all__ = [
    "NoiseVariant", "LandscapeConfig", "PRESETS", "get_preset", "load_config", "save_config",
    "plane_grid", "sample_points", "noise_values", "elevation", "blend_weights", "build_heightfield",
    "Heightfield", "save_npz", "load_npz",
]
