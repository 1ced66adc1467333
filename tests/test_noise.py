import math

import numpy as np
import pytest

from noisefield import noise, noise_array
from noisefield.noise import hash_lattice, hash_lattice_array, MASK32


def test_noise_deterministic():
    p = (0.3, 1.7, -2.2)
    assert noise(p) == noise(p)
    pts = np.array([p, (5.5, -0.25, 9.125)])
    assert np.array_equal(noise_array(pts), noise_array(pts))


def test_noise_zero_on_lattice_points():
    for p in [(0, 0, 0), (1, 2, 3), (-4, 7, -1), (100, -100, 0)]:
        assert noise(tuple(float(v) for v in p)) == 0.0
    pts = np.array([(0, 0, 0), (3, -2, 8)], dtype=np.float64)
    assert np.all(noise_array(pts) == 0.0)


def test_noise_bounded_zero_mean():
    rng = np.random.default_rng(7)
    pts = rng.uniform(-50.0, 50.0, size=(20000, 3))
    vals = noise_array(pts)
    assert np.all(np.isfinite(vals))
    assert np.abs(vals).max() <= 1.1
    assert abs(vals.mean()) < 0.05
    assert vals.std() > 0.05  # not flat


def test_scalar_and_array_agree():
    rng = np.random.default_rng(3)
    pts = rng.uniform(-20.0, 20.0, size=(200, 3))
    batch = noise_array(pts)
    scalar = [noise(tuple(p)) for p in pts.tolist()]
    assert batch.tolist() == pytest.approx(scalar, rel=1e-12, abs=1e-12)


def test_hash_matches_array_version():
    coords = [(0, 0, 0), (1, 2, 3), (-1 & MASK32, 5, -7 & MASK32), (MASK32, MASK32, 0)]
    xs, ys, zs = (np.array(c, dtype=np.uint32) for c in zip(*coords))
    batch = hash_lattice_array(xs, ys, zs)
    assert batch.tolist() == [hash_lattice(*c) for c in coords]


def test_noise_array_shapes():
    assert noise_array(np.zeros((4, 5, 3))).shape == (4, 5)
    assert noise_array(np.zeros((0, 3))).shape == (0,)
    single = noise_array([0.5, 0.25, 0.75])
    assert single.shape == ()
    assert float(single) == pytest.approx(noise((0.5, 0.25, 0.75)))
    with pytest.raises(ValueError):
        noise_array(np.zeros((4, 2)))


def test_noise_continuous_across_lattice_boundary():
    base = (3.0, 0.37, -1.61)
    v0 = noise(base)
    for eps in (1e-2, 1e-4, 1e-6):
        right = noise((base[0] + eps, base[1], base[2]))
        left = noise((base[0] - eps, base[1], base[2]))
        assert abs(right - v0) <= 20 * eps
        assert abs(left - v0) <= 20 * eps


def test_noise_non_finite_propagates():
    assert math.isnan(noise((math.nan, 0.0, 0.0)))
    assert math.isnan(noise((0.5, math.inf, 0.0)))
    assert math.isnan(noise((0.5, 0.5, -math.inf)))
    vals = noise_array([[math.nan, 0.0, 0.0], [0.5, 0.5, 0.5], [math.inf, 1.0, 2.0]])
    assert math.isnan(vals[0]) and math.isnan(vals[2])
    assert math.isfinite(vals[1])


def test_noise_large_coordinates_wrap_consistently():
    p = (1e12 + 0.5, -3e9 + 0.25, 0.75)
    v = noise(p)
    assert math.isfinite(v)
    assert float(noise_array(np.array([p]))[0]) == pytest.approx(v, abs=1e-12)
