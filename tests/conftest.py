"""Shared test fixtures for the seamcarver test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarver.buffer import PixelBuffer


def make_rgba_image(H, W, value=255):
    """Solid opaque image, every colour channel set to value."""
    img = torch.full((H, W, 4), value, dtype=torch.uint8)
    img[..., 3] = 255
    return img


def make_column_image(H, W, col, value=0, background=255):
    """Solid background with a single column of a different colour."""
    img = make_rgba_image(H, W, background)
    img[:, col, :3] = value
    return img


def make_indexed_image(H, W):
    """Every pixel is unique: R = column, G = row, B = 7, A = 255."""
    img = torch.zeros(H, W, 4, dtype=torch.uint8)
    img[..., 0] = torch.arange(W, dtype=torch.uint8).unsqueeze(0)
    img[..., 1] = torch.arange(H, dtype=torch.uint8).unsqueeze(1)
    img[..., 2] = 7
    img[..., 3] = 255
    return img


@pytest.fixture
def random_buffer():
    """Seeded 12x16 random RGBA buffer."""
    gen = torch.Generator().manual_seed(42)
    pixels = torch.randint(0, 256, (12, 16, 4), generator=gen, dtype=torch.uint8)
    return PixelBuffer(pixels)
