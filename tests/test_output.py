"""Tests for tone mapping and image writers."""

import logging

import numpy as np
import pytest
from PIL import Image

from pathtracer.renderer.image_io import save_image, write_png, write_ppm
from pathtracer.renderer.tone_mapping import reinhard, to_rgb8


class TestToRgb8:
    def test_known_values(self):
        linear = np.array([[[0.0, 0.25, 1.0]]])
        assert to_rgb8(linear).tolist() == [[[0, 128, 255]]]

    def test_overexposed_clamps(self):
        assert to_rgb8(np.full((1, 1, 3), 4.0)).tolist() == [[[255, 255, 255]]]

    def test_negative_and_nan_become_black(self, caplog):
        linear = np.array([[[-0.5, np.nan, 0.25]]])
        with caplog.at_level(logging.WARNING, logger="pathtracer.renderer.tone_mapping"):
            rgb8 = to_rgb8(linear)
        assert rgb8.tolist() == [[[0, 0, 128]]]
        assert "NaN" in caplog.text

    def test_dtype_and_shape(self):
        rgb8 = to_rgb8(np.random.default_rng(0).random((3, 5, 3)))
        assert rgb8.dtype == np.uint8
        assert rgb8.shape == (3, 5, 3)

    def test_gamma_one_is_linear(self):
        assert to_rgb8(np.full((1, 1, 3), 0.5), gamma=1.0).tolist() == [[[128, 128, 128]]]


def test_reinhard_compresses_highlights():
    mapped = reinhard(np.array([0.0, 1.0, 100.0]))
    assert mapped[0] == 0.0
    assert mapped[1] == pytest.approx(0.5)
    assert mapped[2] < 1.0


@pytest.fixture
def rgb8():
    return np.array([[[255, 0, 0], [0, 255, 0]],
                     [[0, 0, 255], [10, 20, 30]]], dtype=np.uint8)


class TestWriters:
    def test_ppm_layout(self, tmp_path, rgb8):
        path = tmp_path / "out.ppm"
        write_ppm(path, rgb8)
        lines = path.read_text().splitlines()
        assert lines[:3] == ["P3", "2 2", "255"]
        assert lines[3:] == ["255 0 0", "0 255 0", "0 0 255", "10 20 30"]

    def test_png_round_trip(self, tmp_path, rgb8):
        path = tmp_path / "out.png"
        write_png(path, rgb8)
        with Image.open(path) as img:
            assert img.mode == "RGB"
            np.testing.assert_array_equal(np.asarray(img), rgb8)

    def test_rejects_non_rgb8(self, tmp_path):
        with pytest.raises(ValueError):
            write_ppm(tmp_path / "out.ppm", np.zeros((2, 2, 3), dtype=np.float64))
        with pytest.raises(ValueError):
            write_png(tmp_path / "out.png", np.zeros((2, 2), dtype=np.uint8))

    @pytest.mark.parametrize("name", ["out.ppm", "OUT.PNG"])
    def test_save_image_by_suffix(self, tmp_path, rgb8, name):
        path = tmp_path / name
        save_image(path, rgb8)
        assert path.exists()

    def test_save_image_unknown_suffix(self, tmp_path, rgb8):
        with pytest.raises(ValueError, match="Unsupported"):
            save_image(tmp_path / "out.jpg", rgb8)
