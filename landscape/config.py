# config.py - immutable landscape parameters and named presets
"""Landscape configuration.

One :class:`LandscapeConfig` replaces the per-demo tweak panels: it holds
everything needed to turn plane vertices into heights and color blend
weights.  Values are validated on construction; octave counts go through
:func:`noisefield.validate_octaves` so bad input surfaces as
:class:`noisefield.InvalidOctaveCount`.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import json
import logging
import math
import numbers

import numpy as np

from noisefield import validate_octaves
from .safe_parse import to_int, to_float, to_color

logger = logging.getLogger(__name__)


class NoiseVariant(Enum):
    FBM = "fbm"
    TURBULENCE = "turbulence"

    @classmethod
    def parse(cls, value: Any) -> "NoiseVariant":
        """Accept an enum member, its name/value string, or the panel index 0/1."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            order = list(cls)
            if 0 <= value < len(order):
                return order[value]
        if isinstance(value, str):
            s = value.strip().lower()
            for member in cls:
                if s == member.value:
                    return member
        raise ValueError(f"unknown noise variant {value!r}")


@dataclass(frozen=True)
class LandscapeConfig:
    seed: float = 53.0
    frequency_factor: float = 3.0
    amplitude_factor: float = 0.5
    hurst_exponent: float = 0.9
    num_octaves: int = 4
    variant: NoiseVariant = NoiseVariant.FBM
    resolution: int = 512
    size: float = 2.0
    drift_speed: float = 0.2
    base_color: int = 0x81A1C1
    peak_color: int = 0xD8DEE9
    # smoothstep edges from height to color blend; None blends by raw noise
    blend_edges: Optional[Tuple[float, float]] = (0.0, 0.25)
    # also offset the third noise axis by the seed (the turbulent plane demo)
    seed_all_axes: bool = False

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "num_octaves", validate_octaves(self.num_octaves))
        object.__setattr__(self, "variant", NoiseVariant.parse(self.variant))

        if isinstance(self.resolution, bool) or not isinstance(self.resolution, int) or self.resolution < 1:
            raise ValueError(f"resolution must be a positive int, got {self.resolution!r}")
        for name in ("seed", "frequency_factor", "amplitude_factor", "hurst_exponent", "drift_speed", "size"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, numbers.Real) or not math.isfinite(v):
                raise ValueError(f"{name} must be a finite number, got {v!r}")
        if not self.size > 0.0:
            raise ValueError(f"size must be > 0, got {self.size!r}")
        if not isinstance(self.seed_all_axes, (bool, np.bool_)):
            raise ValueError(f"seed_all_axes must be a bool, got {self.seed_all_axes!r}")
        object.__setattr__(self, "seed_all_axes", bool(self.seed_all_axes))
        for name in ("base_color", "peak_color"):
            c = getattr(self, name)
            if isinstance(c, bool) or not isinstance(c, int) or not 0 <= c <= 0xFFFFFF:
                raise ValueError(f"{name} must be a 0xRRGGBB int, got {c!r}")

        if self.blend_edges is not None:
            if isinstance(self.blend_edges, (str, bytes)):
                raise ValueError(f"blend_edges must be a pair of numbers, got {self.blend_edges!r}")
            try:
                lo, hi = (float(v) for v in self.blend_edges)
            except (TypeError, ValueError):
                raise ValueError(f"blend_edges must be a pair of numbers, got {self.blend_edges!r}") from None
            if not (math.isfinite(lo) and math.isfinite(hi) and lo < hi):
                raise ValueError(f"blend_edges must satisfy lo < hi, got {self.blend_edges!r}")
            object.__setattr__(self, "blend_edges", (lo, hi))

    @property
    def vertex_count(self) -> int:
        return (self.resolution + 1) ** 2

    def with_overrides(self, **changes: Any) -> "LandscapeConfig":
        """Return a copy with ``changes`` applied, skipping ``None`` values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON serialisable dictionary."""
        data = asdict(self)
        data["variant"] = self.variant.value
        data["base_color"] = f"#{self.base_color:06x}"
        data["peak_color"] = f"#{self.peak_color:06x}"
        data["blend_edges"] = list(self.blend_edges) if self.blend_edges is not None else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LandscapeConfig":
        """Build a config from loosely typed data such as parsed JSON.

        Field names may also be given in the camelCase used by the demo
        tweak panel (``noiseFrequency``, ``numOctaves``...).  Unknown keys are
        ignored with a warning.  Missing keys keep their defaults.
        """
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")

        defaults = cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            name = ALIASES.get(key, key)
            if name not in known:
                logger.warning("ignoring unknown config key %r", key)
                continue
            values[name] = raw

        kwargs: Dict[str, Any] = {}
        for name in ("seed", "frequency_factor", "amplitude_factor",
                     "hurst_exponent", "size", "drift_speed"):
            if name in values:
                kwargs[name] = to_float(values[name], getattr(defaults, name))
        if "resolution" in values:
            kwargs["resolution"] = to_int(values["resolution"], defaults.resolution)
        for name in ("base_color", "peak_color"):
            if name in values:
                kwargs[name] = to_color(values[name], getattr(defaults, name))
        # validated strictly in __post_init__
        if "num_octaves" in values:
            kwargs["num_octaves"] = values["num_octaves"]
        if "variant" in values:
            kwargs["variant"] = values["variant"]
        if "blend_edges" in values:
            kwargs["blend_edges"] = values["blend_edges"]
        if "seed_all_axes" in values:
            kwargs["seed_all_axes"] = values["seed_all_axes"]
        return cls(**kwargs)


# camelCase names from the demo tweak panels
ALIASES = {
    "noiseFrequency": "frequency_factor",
    "noiseFrequencyFactor": "frequency_factor",
    "noiseAmplitude": "amplitude_factor",
    "noiseScaleFactor": "amplitude_factor",
    "hurstExponent": "hurst_exponent",
    "numOctaves": "num_octaves",
    "noiseFunction": "variant",
    "baseColor": "base_color",
    "peakColor": "peak_color",
    "color1": "base_color",
    "color2": "peak_color",
}


PRESETS: Dict[str, LandscapeConfig] = {
    "dirt-jam": LandscapeConfig(),
    "rolling-hills": LandscapeConfig(
        resolution=256,
        base_color=0xEBDBB2,
        peak_color=0x1C2021,
        blend_edges=(0.0, 0.75),
    ),
    "turbulent-plane": LandscapeConfig(
        seed=2.0,
        frequency_factor=2.5,
        amplitude_factor=0.6,
        variant=NoiseVariant.TURBULENCE,
        resolution=128,
        base_color=0xCE6561,
        peak_color=0xFFFFFF,
        blend_edges=None,
        seed_all_axes=True,
    ),
}


def get_preset(name: str) -> LandscapeConfig:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"unknown preset {name!r}; choose from {sorted(PRESETS)}") from None


def load_config(path: str) -> LandscapeConfig:
    """Read a :class:`LandscapeConfig` from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: invalid JSON ({exc})") from exc
    logger.debug("loaded config from %s", path)
    return LandscapeConfig.from_dict(data)


def save_config(config: LandscapeConfig, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")
    logger.debug("saved config to %s", path)
