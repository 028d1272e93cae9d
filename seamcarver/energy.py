"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy is the gradient magnitude of luminance: two fixed 3x3 edge kernels
are correlated with the luminance map and combined with an L2 norm.
"""

import logging
from typing import Tuple

import torch
import torch.nn.functional as F

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)

KERNEL_X = torch.tensor([[1.0, 0.0, -1.0],
                         [2.0, 0.0, -2.0],
                         [1.0, 0.0, -1.0]])

KERNEL_Y = torch.tensor([[ 1.0,  2.0,  1.0],
                         [ 0.0,  0.0,  0.0],
                         [-1.0, -2.0, -1.0]])


def luminance(pixels) -> torch.Tensor:
    """
    Convert RGBA8 pixels to a single-channel brightness map.

    Args:
        pixels: uint8 tensor (H, W, 4) or (H, W, 3), or a PixelBuffer

    Returns:
        Luminance map (H, W), float32 in [0, 1]
    """
    if hasattr(pixels, 'pixels'):
        pixels = pixels.pixels

    rgb = pixels[..., :3].to(torch.float32) / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def gradient_energy(lum: torch.Tensor) -> torch.Tensor:
    """
    Gradient magnitude of a luminance map.

    E(x, y) = sqrt(gx^2 + gy^2), with gx and gy the responses to KERNEL_X and
    KERNEL_Y. Neighbours outside the image are skipped, which is the same as
    zero padding by one pixel.

    Args:
        lum: Luminance map (H, W)

    Returns:
        Energy map (H, W)
    """
    H, W = lum.shape
    gray = lum.to(torch.float32).view(1, 1, H, W)

    kx = KERNEL_X.to(device=gray.device).view(1, 1, 3, 3)
    ky = KERNEL_Y.to(device=gray.device).view(1, 1, 3, 3)

    # conv2d is a cross-correlation, so kernels apply as written
    gx = F.conv2d(gray, kx, padding=1)
    gy = F.conv2d(gray, ky, padding=1)

    energy = torch.sqrt(gx * gx + gy * gy)
    return energy.view(H, W)


def compute_energy(pixels) -> torch.Tensor:
    """Luminance followed by gradient magnitude."""
    return gradient_energy(luminance(pixels))


def normalize_energy(energy: torch.Tensor) -> torch.Tensor:
    """Scale an energy map by its maximum into [0, 1].

    Energy is non-negative, so dividing by the max keeps zero at zero.
    An all-zero map is returned unchanged.
    """
    e_max = energy.max()
    if e_max.item() <= 0.0:
        return energy.clone()
    return energy / e_max


def energy_range(name: str, energy: torch.Tensor) -> Tuple[float, float]:
    """Report the min/max of an energy map. Purely informational."""
    e_min = energy.min().item()
    e_max = energy.max().item()
    logger.debug("%s: min=%f, max=%f", name, e_min, e_max)
    return e_min, e_max
