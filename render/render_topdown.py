# render_topdown.py - top-down (2D) images of a sampled heightfield
from __future__ import annotations
from typing import Tuple
import numpy as np
from PIL import Image

from landscape.state import Heightfield


def hex_to_rgb(color: int) -> Tuple[int, int, int]:
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


def blend_colors(blend: np.ndarray, base_color: int, peak_color: int) -> np.ndarray:
    """Mix two packed colors per sample, ``blend`` 0 -> base, 1 -> peak.

    Returns a ``uint8`` array of shape ``blend.shape + (3,)``.  Non finite
    weights are treated as 0.
    """
    w = np.clip(np.nan_to_num(np.asarray(blend, dtype=np.float64), nan=0.0), 0.0, 1.0)[..., None]
    base = np.array(hex_to_rgb(base_color), dtype=np.float64)
    peak = np.array(hex_to_rgb(peak_color), dtype=np.float64)
    rgb = base * (1.0 - w) + peak * w
    return np.clip(np.rint(rgb), 0, 255).astype(np.uint8)


def _upscale(img: Image.Image, scale: int) -> Image.Image:
    if scale > 1:
        img = img.resize((img.width * scale, img.height * scale), Image.NEAREST)
    return img


def render_topdown(field: Heightfield, scale: int = 1) -> Image.Image:
    """Color every vertex by its base/peak blend and return an RGB image."""
    c = field.config
    rgb = blend_colors(field.blend_map, c.base_color, c.peak_color)
    return _upscale(Image.fromarray(rgb), scale)


def render_height(field: Heightfield, scale: int = 1) -> Image.Image:
    """Render the height map in grayscale, normalised to its own min/max.

    A flat map renders as mid gray.
    """
    h = np.asarray(field.height_map, dtype=np.float64)
    finite = np.isfinite(h)
    gray = np.full(h.shape, 128, dtype=np.uint8)
    if finite.any():
        h_min, h_max = float(h[finite].min()), float(h[finite].max())
        if h_max > h_min:
            norm = np.where(finite, (h - h_min) / (h_max - h_min), 0.0)
            gray = np.rint(norm * 255.0).astype(np.uint8)
    return _upscale(Image.fromarray(gray), scale)
