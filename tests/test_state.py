import numpy as np
import pytest

from landscape import Heightfield, LandscapeConfig, build_heightfield, get_preset, load_npz, save_npz


def test_npz_save_load(tmp_path):
    config = get_preset("turbulent-plane").with_overrides(resolution=6)
    field = build_heightfield(config, time=0.75)
    path = tmp_path / "field.npz"
    save_npz(field, str(path))

    loaded = load_npz(str(path))
    assert loaded.config == config
    assert loaded.time == pytest.approx(0.75)
    assert np.array_equal(loaded.height_map, field.height_map)
    assert np.array_equal(loaded.blend_map, field.blend_map)


def test_load_npz_missing_keys(tmp_path):
    path = tmp_path / "partial.npz"
    np.savez_compressed(path, height_map=np.zeros((3, 3), dtype=np.float32))
    with pytest.raises(ValueError, match="missing keys"):
        load_npz(str(path))


def test_heightfield_validates_arrays():
    c = LandscapeConfig(resolution=2)
    ok = np.zeros((3, 3), dtype=np.float32)
    Heightfield(config=c, height_map=ok, blend_map=ok)
    with pytest.raises(ValueError, match="shape"):
        Heightfield(config=c, height_map=np.zeros((4, 3), dtype=np.float32), blend_map=ok)
    with pytest.raises(ValueError, match="dtype"):
        Heightfield(config=c, height_map=ok, blend_map=np.zeros((3, 3)))
    with pytest.raises(ValueError):
        Heightfield(config=c, height_map=ok, blend_map=ok, time=float("nan"))


def test_summary_and_stats():
    c = LandscapeConfig(resolution=2)
    h = np.array([[0.0, 1.0, 2.0], [3.0, 4.0, 5.0], [6.0, 7.0, 8.0]], dtype=np.float32)
    field = Heightfield(config=c, height_map=h, blend_map=np.zeros_like(h))
    s = field.stats()
    assert s["min"] == 0.0 and s["max"] == 8.0
    assert s["mean"] == pytest.approx(4.0)
    assert "fbm 3x3" in field.summary()
    assert "octaves=4" in field.summary()
