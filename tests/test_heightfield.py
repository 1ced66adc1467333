import numpy as np
import pytest

from noisefield import fbm, fbm_array, turbulence
from landscape import (
    get_preset,
    LandscapeConfig,
    NoiseVariant,
    blend_weights,
    build_heightfield,
    elevation,
    noise_values,
    plane_grid,
    sample_points,
)
from landscape.heightfield import smoothstep


def small(**kw):
    return LandscapeConfig(resolution=8, **kw)


def test_plane_grid_layout():
    xs, zs = plane_grid(4, 2.0)
    assert xs.shape == zs.shape == (5, 5)
    assert xs[0].tolist() == pytest.approx([-1.0, -0.5, 0.0, 0.5, 1.0])
    assert zs[:, 0].tolist() == pytest.approx([-1.0, -0.5, 0.0, 0.5, 1.0])
    assert np.all(zs[0] == -1.0)
    assert np.all(xs[:, -1] == 1.0)


def test_sample_points_seed_and_frequency():
    c = small()
    xs, zs = plane_grid(c.resolution, c.size)
    pts = sample_points(xs, zs, c)
    assert pts.shape == xs.shape + (3,)
    assert np.allclose(pts[..., 0], (xs + 53.0) * 3.0)
    assert np.allclose(pts[..., 1], (zs + 53.0) * 3.0)
    assert np.all(pts[..., 2] == 0.0)


def test_sample_points_drift_with_time():
    c = small(drift_speed=0.2)
    xs, zs = plane_grid(c.resolution, c.size)
    pts = sample_points(xs, zs, c, time=2.0)
    assert np.allclose(pts[..., 0], (xs + 53.4) * 3.0)
    assert np.allclose(pts[..., 2], 0.4 * 3.0)


def test_heightfield_shapes_and_dtypes():
    field = build_heightfield(small())
    assert field.shape == (9, 9)
    assert field.height_map.dtype == np.float32
    assert field.blend_map.dtype == np.float32
    assert np.all(np.isfinite(field.height_map))
    assert np.all((field.blend_map >= 0.0) & (field.blend_map <= 1.0))


def test_heightfield_deterministic():
    a = build_heightfield(small())
    b = build_heightfield(small())
    assert np.array_equal(a.height_map, b.height_map)
    assert np.array_equal(a.blend_map, b.blend_map)


def test_heightfield_matches_scalar_fbm():
    c = small()
    field = build_heightfield(c)
    xs, zs = plane_grid(c.resolution, c.size)
    for r, col in [(0, 0), (3, 5), (8, 8)]:
        x, z = float(xs[r, col]), float(zs[r, col])
        p = ((x + c.seed) * c.frequency_factor, (z + c.seed) * c.frequency_factor, 0.0)
        expected = c.amplitude_factor * fbm(p, c.hurst_exponent, c.num_octaves)
        assert float(field.height_map[r, col]) == pytest.approx(expected, rel=1e-5, abs=1e-6)


def test_turbulence_variant_non_negative():
    c = small(variant=NoiseVariant.TURBULENCE)
    field = build_heightfield(c)
    assert np.all(field.height_map >= 0.0)
    xs, zs = plane_grid(c.resolution, c.size)
    p = ((float(xs[2, 6]) + c.seed) * c.frequency_factor, (float(zs[2, 6]) + c.seed) * c.frequency_factor, 0.0)
    expected = c.amplitude_factor * turbulence(p, c.hurst_exponent, c.num_octaves)
    assert float(field.height_map[2, 6]) == pytest.approx(expected, rel=1e-5, abs=1e-6)


def test_elevation_scales_noise_values():
    c = small(amplitude_factor=2.0)
    xs, zs = plane_grid(c.resolution, c.size)
    raw = noise_values(xs, zs, c)
    assert np.allclose(raw, fbm_array(sample_points(xs, zs, c), c.hurst_exponent, c.num_octaves))
    assert np.allclose(elevation(xs, zs, c), 2.0 * raw)


def test_time_moves_landscape():
    c = small()
    a = build_heightfield(c, time=0.0)
    b = build_heightfield(c, time=1.5)
    assert b.time == 1.5
    assert not np.array_equal(a.height_map, b.height_map)


def test_smoothstep():
    out = smoothstep(0.0, 1.0, np.array([-1.0, 0.0, 0.5, 1.0, 2.0]))
    assert out.tolist() == pytest.approx([0.0, 0.0, 0.5, 1.0, 1.0])


def test_blend_weights_modes():
    values = np.array([-0.5, 0.0, 0.2, 0.5, 3.0])
    raw = blend_weights(values, small(blend_edges=None))
    assert raw.tolist() == pytest.approx([0.0, 0.0, 0.2, 0.5, 1.0])

    c = small(amplitude_factor=0.5, blend_edges=(0.0, 0.25))
    w = blend_weights(values, c)
    assert w.tolist() == pytest.approx(smoothstep(0.0, 0.25, values * 0.5).tolist())
    assert w[0] == 0.0 and w[-1] == 1.0


def test_turbulent_plane_seeds_third_axis():
    c = get_preset("turbulent-plane").with_overrides(resolution=2)
    assert c.seed_all_axes
    xs, zs = plane_grid(c.resolution, c.size)
    assert np.allclose(sample_points(xs, zs, c)[..., 2], 2.0 * 2.5)
    pts = sample_points(xs, zs, c, time=3.0)
    assert np.allclose(pts[..., 2], (2.0 + 0.2 * 3.0) * 2.5)
    assert np.allclose(pts[..., 0], (xs + 2.0 + 0.6) * 2.5)


def test_third_axis_unseeded_by_default():
    c = small(seed=7.0)
    assert not c.seed_all_axes
    xs, zs = plane_grid(c.resolution, c.size)
    assert np.all(sample_points(xs, zs, c)[..., 2] == 0.0)
