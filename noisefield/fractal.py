# fractal.py - fBm and turbulence built from octaves of gradient noise
from __future__ import annotations

"""Fractal sums of the base noise.

Each octave doubles the sampling frequency and is weighted by
``frequency ** -hurst``.  The sum is not normalised; callers apply their own
amplitude factor.  The public functions validate the octave count once and
then run the octave loop without further checks.
"""

import math
import numbers
from typing import Any, Sequence

import numpy as np

from .noise import noise, noise_array


class InvalidOctaveCount(ValueError):
    """Raised when an octave count is negative or not a whole number."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"octave count must be a non-negative integer, got {value!r}")
        self.value = value


def validate_octaves(value: Any) -> int:
    """Return ``value`` as an ``int`` octave count or raise :class:`InvalidOctaveCount`.

    Integral floats such as ``4.0`` (what JSON and slider widgets tend to
    produce) are accepted.  Booleans, strings, ``nan`` and fractional values
    are not.
    """
    if isinstance(value, (bool, np.bool_)):
        raise InvalidOctaveCount(value)
    if isinstance(value, numbers.Integral):
        n = int(value)
    elif isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        n = int(value)
    else:
        raise InvalidOctaveCount(value)
    if n < 0:
        raise InvalidOctaveCount(value)
    return n


def octave_frequencies(octaves: int) -> np.ndarray:
    """Frequencies ``2**i`` for ``i`` in ``range(octaves)``; past 2**1023 they overflow to ``inf``."""
    with np.errstate(over="ignore"):
        return np.ldexp(1.0, np.arange(octaves))


def octave_amplitudes(hurst: float, octaves: int) -> np.ndarray:
    """Per-octave weights ``2**(-i * hurst)``.

    Octave 0 always has weight 1.  Large negative exponents overflow to
    ``inf`` rather than raising.
    """
    n = validate_octaves(octaves)
    with np.errstate(over="ignore"):
        return np.power(octave_frequencies(n), -float(hurst))


def _octaves(hurst: float, n: int) -> list[tuple[float, float]]:
    freqs = octave_frequencies(n)
    with np.errstate(over="ignore"):
        amps = np.power(freqs, -float(hurst))
    return list(zip(freqs.tolist(), amps.tolist()))


def _fractal_sum(p: Sequence[float], hurst: float, n: int, rectify: bool) -> float:
    x, y, z = p
    t = 0.0
    for f, a in _octaves(hurst, n):
        v = noise((f * x, f * y, f * z))
        t += a * (abs(v) if rectify else v)
    return t


def _fractal_sum_array(points: np.ndarray, hurst: float, n: int, rectify: bool) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    t = np.zeros(pts.shape[:-1], dtype=np.float64)
    for f, a in _octaves(hurst, n):
        # inf frequencies give nan samples, as in the scalar path
        with np.errstate(over="ignore", invalid="ignore"):
            v = noise_array(f * pts)
            t += a * (np.abs(v) if rectify else v)
    return t


def fbm(p: Sequence[float], hurst: float, octaves: int) -> float:
    """Fractal Brownian motion at ``p``.

    ``hurst`` near 1 keeps the high octaves strong (rough terrain), near 0
    they fade quickly (smooth terrain).  ``octaves == 0`` returns ``0.0``.
    """
    return _fractal_sum(p, hurst, validate_octaves(octaves), rectify=False)


def turbulence(p: Sequence[float], hurst: float, octaves: int) -> float:
    """Like :func:`fbm` but each octave contributes ``abs(noise)``; never negative."""
    return _fractal_sum(p, hurst, validate_octaves(octaves), rectify=True)


def fbm_array(points, hurst: float, octaves: int) -> np.ndarray:
    return _fractal_sum_array(points, hurst, validate_octaves(octaves), rectify=False)


def turbulence_array(points, hurst: float, octaves: int) -> np.ndarray:
    return _fractal_sum_array(points, hurst, validate_octaves(octaves), rectify=True)
