"""
Image decode/encode helpers built on Pillow.
"""

import logging
from pathlib import Path
from typing import Tuple

import numpy as np
import torch
from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer
from .energy import normalize_energy
from .errors import LoadError, WriteError

logger = logging.getLogger(__name__)


def load_image(path) -> PixelBuffer:
    """Load an image file as an RGBA pixel buffer.

    Raises:
        LoadError: if the file is missing, unreadable or not an image
    """
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGBA'), dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise LoadError(f"Couldn't load image {path}: {e}") from e

    buffer = PixelBuffer.from_numpy(img_array)
    logger.info("Loaded image %s (width=%d, height=%d)", path, buffer.width, buffer.height)
    return buffer


def _write(path, img: Image.Image):
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        img.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise WriteError(f"Failed to save {path}: {e}") from e


def save_image(path, pixels) -> Tuple[int, int]:
    """
    Save the valid region of a pixel buffer (or an (H, W, 4) uint8 tensor).

    The format follows the file extension. Formats without an alpha channel
    (e.g. JPEG) get an RGB copy.

    Returns:
        (width, height) of the written image

    Raises:
        WriteError: on I/O or encoding failure
    """
    if isinstance(pixels, PixelBuffer):
        pixels = pixels.pixels
    img_array = np.ascontiguousarray(pixels.cpu().numpy())
    img = Image.fromarray(img_array)

    if Path(path).suffix.lower() in ('.jpg', '.jpeg', '.bmp'):
        img = img.convert('RGB')

    _write(path, img)
    height, width = img_array.shape[:2]
    logger.info("Saved %s (width=%d, height=%d)", path, width, height)
    return width, height


def save_energy_map(path, energy: torch.Tensor, normalize: bool = True):
    """
    Dump a luminance or gradient map as an opaque grayscale image.

    Args:
        path: Output path
        energy: Map (H, W); values are expected in [0, 1] unless normalized
        normalize: Scale by the map's maximum first (for gradient maps)
    """
    if normalize:
        energy = normalize_energy(energy)
    gray = (energy.cpu().numpy() * 255).clip(0, 255).astype(np.uint8)
    img = Image.fromarray(gray).convert('RGBA')

    _write(path, img)
    logger.info("Saved energy map to %s", path)
