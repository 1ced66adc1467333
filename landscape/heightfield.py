# heightfield.py - sample the noise core over the vertices of a plane
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from noisefield import fbm_array, turbulence_array
from .config import LandscapeConfig, NoiseVariant
from .state import Heightfield

logger = logging.getLogger(__name__)

VARIANTS = {
    NoiseVariant.FBM: fbm_array,
    NoiseVariant.TURBULENCE: turbulence_array,
}


def plane_grid(resolution: int, size: float = 2.0) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(xs, zs)`` vertex coordinates of a subdivided plane.

    The plane lies in x/z, is centred on the origin and has
    ``resolution + 1`` vertices per side.  Row ``r`` holds the vertices with
    the ``r``-th smallest z.
    """
    half = size / 2.0
    line = np.linspace(-half, half, resolution + 1, dtype=np.float64)
    xs, zs = np.meshgrid(line, line)
    return xs, zs


def sample_points(xs: np.ndarray, zs: np.ndarray, config: LandscapeConfig,
                  time: float = 0.0) -> np.ndarray:
    """Noise coordinates for plane vertices, shape ``xs.shape + (3,)``.

    The seed shifts x and z, and the third axis too when ``seed_all_axes``
    is set; ``drift_speed * time`` shifts all three axes so an animated
    landscape moves through the noise volume.
    """
    drift = config.drift_speed * time
    offset = config.seed + drift
    depth = offset if config.seed_all_axes else drift
    pts = np.stack(
        [xs + offset, zs + offset, np.full(np.shape(xs), depth, dtype=np.float64)],
        axis=-1,
    )
    return pts * config.frequency_factor


def smoothstep(edge0: float, edge1: float, x: np.ndarray) -> np.ndarray:
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def noise_values(xs: np.ndarray, zs: np.ndarray, config: LandscapeConfig,
                 time: float = 0.0) -> np.ndarray:
    """Raw fractal noise (before the amplitude factor) at each vertex."""
    fn = VARIANTS[config.variant]
    return fn(sample_points(xs, zs, config, time), config.hurst_exponent, config.num_octaves)


def elevation(xs: np.ndarray, zs: np.ndarray, config: LandscapeConfig,
              time: float = 0.0) -> np.ndarray:
    return noise_values(xs, zs, config, time) * config.amplitude_factor


def blend_weights(values: np.ndarray, config: LandscapeConfig) -> np.ndarray:
    """Map raw noise values to a ``[0, 1]`` base->peak color weight.

    With ``blend_edges`` set the weight is a smoothstep over the elevation;
    otherwise the raw noise value itself is used, clipped to ``[0, 1]``.
    """
    if config.blend_edges is None:
        return np.clip(values, 0.0, 1.0)
    lo, hi = config.blend_edges
    return smoothstep(lo, hi, values * config.amplitude_factor)


def build_heightfield(config: LandscapeConfig, time: float = 0.0) -> Heightfield:
    """Sample ``config`` over its plane and return the resulting :class:`Heightfield`."""
    xs, zs = plane_grid(config.resolution, config.size)
    logger.debug("sampling %d vertices (%s, %d octaves)",
                 xs.size, config.variant.value, config.num_octaves)
    values = noise_values(xs, zs, config, time)
    height = (values * config.amplitude_factor).astype(np.float32)
    blend = blend_weights(values, config).astype(np.float32)
    field = Heightfield(config=config, height_map=height, blend_map=blend, time=float(time))
    logger.info("built heightfield: %s", field.summary())
    return field
