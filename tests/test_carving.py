"""
Tests for the carving orchestrator.

Organized into:
  1. Single iterations (width decrement, seam choice, floor)
  2. Batch carving (fixed counts, target widths, repetition bound)
  3. Functional wrapper
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarver.buffer import PixelBuffer
from seamcarver.carving import SeamCarver, carve_image
from seamcarver.seam import is_valid_seam

from conftest import make_column_image, make_indexed_image, make_rgba_image


# ---------------------------------------------------------------------------
# 1. Single iterations
# ---------------------------------------------------------------------------

class TestAdvance:
    def test_high_contrast_column_is_removed(self):
        """A black column on white is the cheapest seam and goes first."""
        carver = SeamCarver(PixelBuffer(make_column_image(3, 4, col=2)))
        seam = carver.advance()

        assert seam.tolist() == [2, 2, 2]
        assert carver.width == 3
        assert carver.height == 3
        assert (carver.current()[..., :3] == 255).all()

    def test_width_decrements_by_one(self, random_buffer):
        carver = SeamCarver(random_buffer)
        before = (carver.width, carver.height)
        carver.advance()
        assert (carver.width, carver.height) == (before[0] - 1, before[1])

    def test_result_is_original_minus_seam(self):
        pixels = make_indexed_image(6, 9)
        pixels[..., 2] = torch.randint(0, 256, (6, 9), generator=torch.Generator().manual_seed(1),
                                       dtype=torch.uint8)
        carver = SeamCarver(PixelBuffer(pixels.clone()))
        seam = carver.advance()

        assert is_valid_seam(seam, 9)
        for y in range(6):
            col = seam[y].item()
            expected = torch.cat([pixels[y, :col], pixels[y, col + 1:]])
            assert torch.equal(carver.current()[y], expected)

    def test_floor_leaves_buffer_unchanged(self):
        carver = SeamCarver(PixelBuffer(make_indexed_image(4, 1)))
        before = carver.current().clone()

        assert not carver.can_advance()
        assert carver.advance() is None
        assert carver.width == 1
        assert torch.equal(carver.current(), before)
        assert carver.seams_removed == 0

    def test_tracks_last_seam_and_count(self, random_buffer):
        carver = SeamCarver(random_buffer)
        seam = carver.advance()
        assert carver.last_seam is seam
        assert carver.seams_removed == 1

    def test_on_seam_callback(self, random_buffer):
        calls = []
        carver = SeamCarver(random_buffer, on_seam=lambda c, s: calls.append((c.width, s)))
        carver.carve(3)
        assert [w for w, _ in calls] == [15, 14, 13]

    def test_random_start_is_reproducible(self):
        torch.manual_seed(0)
        pixels = torch.randint(0, 256, (10, 12, 4), dtype=torch.uint8)
        a = SeamCarver(PixelBuffer(pixels.clone()), start='random', seed=11)
        b = SeamCarver(PixelBuffer(pixels.clone()), start='random', seed=11)
        for _ in range(4):
            seam_a, seam_b = a.advance(), b.advance()
            assert torch.equal(seam_a, seam_b)
            assert is_valid_seam(seam_a, a.width + 1)

    def test_invalid_start_policy(self, random_buffer):
        with pytest.raises(ValueError):
            SeamCarver(random_buffer, start='greedy')

    def test_report_energy_logs_ranges(self, random_buffer, caplog):
        carver = SeamCarver(random_buffer, report_energy=True)
        with caplog.at_level('DEBUG', logger='seamcarver'):
            carver.advance()
        assert "Luminance: min=" in caplog.text
        assert "Gradient: min=" in caplog.text


# ---------------------------------------------------------------------------
# 2. Batch carving
# ---------------------------------------------------------------------------

class TestCarve:
    def test_reduces_width(self, random_buffer):
        carver = SeamCarver(random_buffer)
        assert carver.carve(5) == 5
        assert carver.current().shape == (12, 11, 4)

    def test_zero_seams_is_noop(self, random_buffer):
        before = random_buffer.pixels.clone()
        assert SeamCarver(random_buffer).carve(0) == 0
        assert torch.equal(random_buffer.pixels, before)

    def test_negative_seams_rejected(self, random_buffer):
        with pytest.raises(ValueError):
            SeamCarver(random_buffer).carve(-1)

    def test_stops_gracefully_at_floor(self):
        """Asking for more seams than columns ends 1 pixel wide."""
        carver = SeamCarver(PixelBuffer(make_indexed_image(5, 6)))
        removed = carver.carve(10)
        assert removed == 5
        assert carver.width == 1
        assert carver.height == 5

    def test_floor_warning(self, caplog):
        carver = SeamCarver(PixelBuffer(make_indexed_image(2, 3)))
        with caplog.at_level('WARNING', logger='seamcarver'):
            carver.carve(3)
        assert "Stopped after 2 of 3 seams" in caplog.text

    def test_sharp_edge_survives(self):
        """Seams route around a strong vertical edge."""
        H, W = 30, 40
        pixels = make_rgba_image(H, W, 0)
        pixels[:, 20:, :3] = 255
        carver = SeamCarver(PixelBuffer(pixels))
        carver.carve(5)

        row = carver.current()[H // 2, :, 0].to(torch.int32)
        assert (row[1:] - row[:-1]).abs().max() == 255


class TestCarveToWidth:
    def test_reaches_target(self, random_buffer):
        carver = SeamCarver(random_buffer)
        assert carver.carve_to_width(9) == 7
        assert carver.width == 9

    def test_target_above_width_is_noop(self, random_buffer):
        carver = SeamCarver(random_buffer)
        assert carver.carve_to_width(50) == 0
        assert carver.width == 16

    def test_target_one(self):
        carver = SeamCarver(PixelBuffer(make_indexed_image(3, 4)))
        carver.carve_to_width(1)
        assert carver.width == 1

    def test_target_below_one_rejected(self, random_buffer):
        with pytest.raises(ValueError):
            SeamCarver(random_buffer).carve_to_width(0)


# ---------------------------------------------------------------------------
# 3. Functional wrapper
# ---------------------------------------------------------------------------

class TestCarveImage:
    def test_n_seams(self):
        pixels = make_indexed_image(8, 10)
        carved = carve_image(pixels, n_seams=4)
        assert carved.shape == (8, 6, 4)

    def test_target_width(self):
        pixels = make_indexed_image(8, 10)
        carved = carve_image(pixels, target_width=7)
        assert carved.shape == (8, 7, 4)

    def test_input_not_modified(self):
        pixels = make_indexed_image(4, 6)
        before = pixels.clone()
        carve_image(pixels, n_seams=2)
        assert torch.equal(pixels, before)

    def test_requires_exactly_one_mode(self):
        pixels = make_indexed_image(4, 6)
        with pytest.raises(ValueError):
            carve_image(pixels)
        with pytest.raises(ValueError):
            carve_image(pixels, n_seams=1, target_width=3)
