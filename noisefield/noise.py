# noise.py - 3D Perlin gradient noise (MaterialX flavour)
from __future__ import annotations

"""Base noise primitive.

Lattice corners are hashed with Bob Jenkins' ``lookup3`` final mix over the
integer cell coordinates, a gradient is picked from the low four hash bits
and the eight corner contributions are blended with the quintic fade curve.
This is the same construction as MaterialX ``mx_perlin_noise_float`` so the
values match what the original landscape shaders displaced with (up to
float32 vs float64 rounding).

The scalar :func:`noise` is plain ``math`` and meant for per-vertex calls;
:func:`noise_array` evaluates whole ``(..., 3)`` arrays with numpy.
"""

import math
from typing import Sequence

import numpy as np

MASK32 = 0xFFFFFFFF
# Seed of the lookup3 hash for three 32-bit words
HASH_INIT = (0xDEADBEEF + (3 << 2) + 13) & MASK32
# Keeps the 3D gradient noise roughly inside [-1, 1]
GRADIENT_SCALE_3D = 0.9820

_U32 = np.uint32


def _rotl32(x: int, k: int) -> int:
    return ((x << k) | (x >> (32 - k))) & MASK32


def hash_lattice(x: int, y: int, z: int) -> int:
    """Hash integer lattice coordinates into an unsigned 32-bit value."""
    a = (HASH_INIT + x) & MASK32
    b = (HASH_INIT + y) & MASK32
    c = (HASH_INIT + z) & MASK32
    # lookup3 final()
    c ^= b; c = (c - _rotl32(b, 14)) & MASK32
    a ^= c; a = (a - _rotl32(c, 11)) & MASK32
    b ^= a; b = (b - _rotl32(a, 25)) & MASK32
    c ^= b; c = (c - _rotl32(b, 16)) & MASK32
    a ^= c; a = (a - _rotl32(c, 4)) & MASK32
    b ^= a; b = (b - _rotl32(a, 14)) & MASK32
    c ^= b; c = (c - _rotl32(b, 24)) & MASK32
    return c


def fade(t: float) -> float:
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def gradient(hash_value: int, x: float, y: float, z: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    v = y if h < 4 else (x if h in (12, 14) else z)
    return (-u if h & 1 else u) + (-v if h & 2 else v)


def trilerp(v0: float, v1: float, v2: float, v3: float,
            v4: float, v5: float, v6: float, v7: float,
            s: float, t: float, r: float) -> float:
    s1 = 1.0 - s
    t1 = 1.0 - t
    r1 = 1.0 - r
    return (r1 * (t1 * (v0 * s1 + v1 * s) + t * (v2 * s1 + v3 * s))
            + r * (t1 * (v4 * s1 + v5 * s) + t * (v6 * s1 + v7 * s)))


def noise(p: Sequence[float]) -> float:
    """Evaluate gradient noise at the 3D point ``p``.

    The result is continuous, zero at every integer lattice point and roughly
    within ``[-1, 1]``.  Non-finite coordinates give ``nan``.
    """
    x, y, z = p
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return math.nan

    ix = math.floor(x)
    iy = math.floor(y)
    iz = math.floor(z)
    fx = x - ix
    fy = y - iy
    fz = z - iz
    # two's complement wrap, matching uint(int) on the GPU
    X = ix & MASK32
    Y = iy & MASK32
    Z = iz & MASK32
    X1 = (X + 1) & MASK32
    Y1 = (Y + 1) & MASK32
    Z1 = (Z + 1) & MASK32

    result = trilerp(
        gradient(hash_lattice(X, Y, Z), fx, fy, fz),
        gradient(hash_lattice(X1, Y, Z), fx - 1.0, fy, fz),
        gradient(hash_lattice(X, Y1, Z), fx, fy - 1.0, fz),
        gradient(hash_lattice(X1, Y1, Z), fx - 1.0, fy - 1.0, fz),
        gradient(hash_lattice(X, Y, Z1), fx, fy, fz - 1.0),
        gradient(hash_lattice(X1, Y, Z1), fx - 1.0, fy, fz - 1.0),
        gradient(hash_lattice(X, Y1, Z1), fx, fy - 1.0, fz - 1.0),
        gradient(hash_lattice(X1, Y1, Z1), fx - 1.0, fy - 1.0, fz - 1.0),
        fade(fx), fade(fy), fade(fz),
    )
    return GRADIENT_SCALE_3D * result


# ---------------------------------------------------------------------------
# numpy batch evaluation
# ---------------------------------------------------------------------------


def _rotl32_array(x: np.ndarray, k: int) -> np.ndarray:
    return (x << _U32(k)) | (x >> _U32(32 - k))


def hash_lattice_array(x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    """Vectorised :func:`hash_lattice` over ``uint32`` arrays."""
    a = x + _U32(HASH_INIT)
    b = y + _U32(HASH_INIT)
    c = z + _U32(HASH_INIT)
    c = (c ^ b) - _rotl32_array(b, 14)
    a = (a ^ c) - _rotl32_array(c, 11)
    b = (b ^ a) - _rotl32_array(a, 25)
    c = (c ^ b) - _rotl32_array(b, 16)
    a = (a ^ c) - _rotl32_array(c, 4)
    b = (b ^ a) - _rotl32_array(a, 14)
    c = (c ^ b) - _rotl32_array(b, 24)
    return c


def gradient_array(h: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    h = h & _U32(15)
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    u = np.where((h & _U32(1)) != 0, -u, u)
    v = np.where((h & _U32(2)) != 0, -v, v)
    return u + v


def _cell(coord: np.ndarray, finite: np.ndarray) -> np.ndarray:
    # floor() mod 2**32 is exact in float64 and equals the uint32 wrap
    safe = np.where(finite, coord, 0.0)
    return np.mod(np.floor(safe), 4294967296.0).astype(_U32)


def noise_array(points) -> np.ndarray:
    """Evaluate :func:`noise` for every point of an ``(..., 3)`` array.

    Values agree with the scalar form; rows holding ``nan`` or ``inf`` give
    ``nan`` without raising.
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.shape[-1:] != (3,):
        raise ValueError(f"points must have shape (..., 3), got {pts.shape}")
    out_shape = pts.shape[:-1]
    # keep everything 1-D so uint32 arithmetic wraps silently
    flat = pts.reshape(-1, 3)

    x, y, z = flat[:, 0], flat[:, 1], flat[:, 2]
    finite = np.isfinite(x) & np.isfinite(y) & np.isfinite(z)

    with np.errstate(invalid="ignore"):
        fx = x - np.floor(x)
        fy = y - np.floor(y)
        fz = z - np.floor(z)
    X, Y, Z = _cell(x, finite), _cell(y, finite), _cell(z, finite)
    X1, Y1, Z1 = X + _U32(1), Y + _U32(1), Z + _U32(1)

    g = gradient_array
    h = hash_lattice_array
    v0 = g(h(X, Y, Z), fx, fy, fz)
    v1 = g(h(X1, Y, Z), fx - 1.0, fy, fz)
    v2 = g(h(X, Y1, Z), fx, fy - 1.0, fz)
    v3 = g(h(X1, Y1, Z), fx - 1.0, fy - 1.0, fz)
    v4 = g(h(X, Y, Z1), fx, fy, fz - 1.0)
    v5 = g(h(X1, Y, Z1), fx - 1.0, fy, fz - 1.0)
    v6 = g(h(X, Y1, Z1), fx, fy - 1.0, fz - 1.0)
    v7 = g(h(X1, Y1, Z1), fx - 1.0, fy - 1.0, fz - 1.0)

    result = trilerp(v0, v1, v2, v3, v4, v5, v6, v7, fade(fx), fade(fy), fade(fz))
    out = np.where(finite, GRADIENT_SCALE_3D * result, np.nan)
    return out.reshape(out_shape)
