from __future__ import annotations

"""Heightfield container and persistence helpers."""

from dataclasses import dataclass
from typing import Any, Dict
import json
import logging
import math

import numpy as np

from .config import LandscapeConfig

logger = logging.getLogger(__name__)

REQUIRED_KEYS = {"config", "height_map", "blend_map", "time"}


@dataclass
class Heightfield:
    """Sampled landscape: per-vertex heights and color blend weights."""

    config: LandscapeConfig
    height_map: np.ndarray
    blend_map: np.ndarray
    time: float = 0.0

    def __post_init__(self) -> None:
        n = self.config.resolution + 1
        expected = (n, n)
        for name, arr in (("height_map", self.height_map), ("blend_map", self.blend_map)):
            if arr.shape != expected:
                raise ValueError(f"{name} shape {arr.shape} != {expected}")
            if arr.dtype != np.float32:
                raise ValueError(f"{name} dtype {arr.dtype} != float32")
        if not math.isfinite(self.time):
            raise ValueError(f"time must be finite, got {self.time!r}")

    @property
    def shape(self) -> tuple[int, int]:
        return self.height_map.shape

    def stats(self) -> Dict[str, float]:
        """Min/max/mean of the height map, ignoring non finite samples."""
        h = self.height_map[np.isfinite(self.height_map)]
        if h.size == 0:
            return {"min": math.nan, "max": math.nan, "mean": math.nan}
        return {"min": float(h.min()), "max": float(h.max()), "mean": float(h.mean())}

    def summary(self) -> str:
        s = self.stats()
        c = self.config
        return (f"{c.variant.value} {self.shape[1]}x{self.shape[0]} "
                f"H={c.hurst_exponent:g} octaves={c.num_octaves} "
                f"height=[{s['min']:.4f}, {s['max']:.4f}] mean={s['mean']:.4f}")


def save_npz(field: Heightfield, path: str) -> None:
    """Persist a :class:`Heightfield` to ``path`` using ``np.savez_compressed``."""
    np.savez_compressed(
        path,
        config=np.array(json.dumps(field.config.to_dict())),
        height_map=field.height_map,
        blend_map=field.blend_map,
        time=np.array(field.time, dtype=np.float64),
    )
    logger.info("saved heightfield %s to %s", field.shape, path)


def load_npz(path: str) -> Heightfield:
    """Load a :class:`Heightfield` from ``path`` and validate its contents."""
    with np.load(path) as data:
        missing = REQUIRED_KEYS.difference(data.files)
        if missing:
            raise ValueError(f"missing keys: {sorted(missing)}")
        try:
            raw: Any = json.loads(str(data["config"]))
        except json.JSONDecodeError as exc:
            raise ValueError(f"config is not valid JSON ({exc})") from exc
        config = LandscapeConfig.from_dict(raw)
        height_map = np.asarray(data["height_map"])
        blend_map = np.asarray(data["blend_map"])
        time = float(data["time"])
    return Heightfield(config=config, height_map=height_map, blend_map=blend_map, time=time)
