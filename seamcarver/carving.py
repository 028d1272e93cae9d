"""
High-level carving: the orchestrator that owns the pixel buffer and drives
one energy -> cost -> seam -> removal iteration per removed seam.
"""

import logging
from typing import Callable, Optional

import torch

from .buffer import PixelBuffer
from .energy import luminance, gradient_energy, energy_range
from .seam import START_POLICIES, accumulate_cost, trace_seam, remove_seam

logger = logging.getLogger(__name__)

MIN_WIDTH = 1


class SeamCarver:
    """
    Owns a PixelBuffer and shrinks it one vertical seam at a time.

    Batch drivers call carve() or carve_to_width(); an interactive render
    loop calls advance() once per frame and reads current() to refresh
    the display.

    Args:
        buffer: Pixel buffer, mutated in place
        start: Bottom-row starting policy, 'min' (default) or 'random'
        seed: Seed for the 'random' policy
        report_energy: Log min/max of the energy maps every iteration
        on_seam: Called with (carver, seam) after every removal
    """

    def __init__(self, buffer: PixelBuffer, start: str = 'min',
                 seed: Optional[int] = None, report_energy: bool = False,
                 on_seam: Optional[Callable] = None):
        if start not in START_POLICIES:
            raise ValueError(f"Invalid start policy: {start!r}. Must be one of {START_POLICIES}")

        self.buffer = buffer
        self.start = start
        self.report_energy = report_energy
        self.on_seam = on_seam
        self.last_seam = None
        self.seams_removed = 0

        self.generator = torch.Generator()
        if seed is not None:
            self.generator.manual_seed(seed)
        else:
            self.generator.seed()

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def current(self) -> torch.Tensor:
        """Valid region of the working buffer, (H, width, 4)."""
        return self.buffer.pixels

    def can_advance(self) -> bool:
        return self.buffer.width > MIN_WIDTH

    def advance(self) -> Optional[torch.Tensor]:
        """
        Remove one seam.

        Returns:
            The removed seam, or None if the buffer is already at the
            minimum width (the buffer is left untouched).
        """
        if not self.can_advance():
            return None

        lum = luminance(self.buffer)
        energy = gradient_energy(lum)
        if self.report_energy:
            energy_range("Luminance", lum)
            energy_range("Gradient", energy)

        cost = accumulate_cost(energy)
        seam = trace_seam(cost, start=self.start, generator=self.generator)
        remove_seam(self.buffer, seam)

        self.last_seam = seam
        self.seams_removed += 1
        logger.debug("Removed seam %d, width now %d", self.seams_removed, self.buffer.width)

        if self.on_seam is not None:
            self.on_seam(self, seam)
        return seam

    def carve(self, n_seams: int) -> int:
        """
        Remove up to n_seams seams, stopping early at the minimum width.

        Returns:
            Number of seams actually removed
        """
        if n_seams < 0:
            raise ValueError(f"n_seams must be non-negative, got {n_seams}")

        removed = 0
        report_every = max(1, n_seams // 10)
        for i in range(n_seams):
            if self.advance() is None:
                logger.warning("Stopped after %d of %d seams: image is %d pixel wide",
                               removed, n_seams, self.buffer.width)
                break
            removed += 1
            if (i + 1) % report_every == 0:
                logger.info("Removed %d/%d seams, size: %dx%d",
                            i + 1, n_seams, self.buffer.width, self.buffer.height)
        return removed

    def carve_to_width(self, target_width: int) -> int:
        """
        Remove seams until the buffer is target_width wide.

        A target at or above the current width removes nothing.

        Returns:
            Number of seams removed
        """
        if target_width < MIN_WIDTH:
            raise ValueError(f"target_width must be at least {MIN_WIDTH}, got {target_width}")
        return self.carve(max(0, self.buffer.width - target_width))


def carve_image(pixels: torch.Tensor, n_seams: Optional[int] = None,
                target_width: Optional[int] = None, start: str = 'min',
                seed: Optional[int] = None) -> torch.Tensor:
    """
    Seam carve a copy of an RGBA image.

    Args:
        pixels: uint8 tensor (H, W, 4)
        n_seams: Number of seams to remove
        target_width: Width to shrink to (alternative to n_seams)
        start: Bottom-row starting policy, 'min' or 'random'
        seed: Seed for the 'random' policy

    Returns:
        Carved image (H, W', 4); the input is not modified
    """
    if (n_seams is None) == (target_width is None):
        raise ValueError("Exactly one of n_seams and target_width must be given")

    carver = SeamCarver(PixelBuffer(pixels.clone()), start=start, seed=seed)
    if n_seams is not None:
        carver.carve(n_seams)
    else:
        carver.carve_to_width(target_width)
    return carver.current().clone()
