"""
Content-aware image shrinking by vertical seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import SeamCarverError, LoadError, WriteError, DegenerateGeometryError
from .buffer import PixelBuffer
from .energy import luminance, gradient_energy, compute_energy, normalize_energy, energy_range
from .seam import (accumulate_cost, trace_seam, find_seam, seam_cost, is_valid_seam,
                   remove_seam)
from .carving import SeamCarver, carve_image
from .image_io import load_image, save_image, save_energy_map

__all__ = [
    'SeamCarverError',
    'LoadError',
    'WriteError',
    'DegenerateGeometryError',
    'PixelBuffer',
    'luminance',
    'gradient_energy',
    'compute_energy',
    'normalize_energy',
    'energy_range',
    'accumulate_cost',
    'trace_seam',
    'find_seam',
    'seam_cost',
    'is_valid_seam',
    'remove_seam',
    'SeamCarver',
    'carve_image',
    'load_image',
    'save_image',
    'save_energy_map',
]
