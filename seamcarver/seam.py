"""
Seam computation and removal.

A vertical seam holds one column index per row, with adjacent rows differing
by at most one column. The minimal seam is found by dynamic programming:
accumulate the cheapest cost of reaching every pixel from the top row, then
backtrace from the bottom row.
"""

import logging
from typing import Optional

import torch

from .buffer import PixelBuffer
from .energy import compute_energy
from .errors import DegenerateGeometryError

logger = logging.getLogger(__name__)

START_POLICIES = ('min', 'random')


def accumulate_cost(energy: torch.Tensor) -> torch.Tensor:
    """
    Cumulative seam cost table.

    cost[0] = energy[0]
    cost[y, x] = energy[y, x] + min(cost[y-1, x-1], cost[y-1, x], cost[y-1, x+1])

    Neighbours outside [0, W) are ignored. Each row only reads the row above.

    Args:
        energy: Energy map (H, W)

    Returns:
        Cost table (H, W)
    """
    H, W = energy.shape
    cost = energy.to(torch.float32).clone()

    for y in range(1, H):
        prev = cost[y - 1]
        from_left = torch.full((W,), float('inf'), device=cost.device, dtype=cost.dtype)
        from_left[1:] = prev[:-1]
        from_right = torch.full((W,), float('inf'), device=cost.device, dtype=cost.dtype)
        from_right[:-1] = prev[1:]

        cost[y] = energy[y] + torch.min(torch.min(from_left, prev), from_right)

    return cost


def trace_seam(cost: torch.Tensor, start: str = 'min',
               generator: Optional[torch.Generator] = None) -> torch.Tensor:
    """
    Backtrace a vertical seam through a cost table, bottom row to top.

    The walk starts in the last row, at the first minimal-cost column
    ('min') or at a uniformly random column ('random'). At each step the
    walk stays in its column unless the left neighbour above is strictly
    cheaper; the right neighbour then wins only if strictly cheaper than
    that choice.

    Args:
        cost: Cost table (H, W) from accumulate_cost
        start: Starting column policy, 'min' or 'random'
        generator: Optional RNG for the 'random' policy

    Returns:
        Seam indices (H,) with the column index per row
    """
    H, W = cost.shape

    if start == 'min':
        x = torch.argmin(cost[-1]).item()
    elif start == 'random':
        x = torch.randint(0, W, (1,), generator=generator).item()
    else:
        raise ValueError(f"Invalid start policy: {start!r}. Must be one of {START_POLICIES}")

    rows = cost.tolist()
    seam = torch.zeros(H, dtype=torch.long, device=cost.device)
    seam[H - 1] = x

    for y in range(H - 1, 0, -1):
        above = rows[y - 1]
        best = x
        if x - 1 >= 0 and above[x - 1] < above[best]:
            best = x - 1
        if x + 1 < W and above[x + 1] < above[best]:
            best = x + 1
        x = best
        seam[y - 1] = x

    return seam


def find_seam(pixels, start: str = 'min',
              generator: Optional[torch.Generator] = None) -> torch.Tensor:
    """Run energy, cost accumulation and backtrace on the current pixels."""
    return trace_seam(accumulate_cost(compute_energy(pixels)), start=start,
                      generator=generator)


def seam_cost(energy: torch.Tensor, seam: torch.Tensor) -> float:
    """Total energy along a vertical seam."""
    rows = torch.arange(energy.shape[0], device=energy.device)
    return energy[rows, seam.to(energy.device)].sum().item()


def is_valid_seam(seam: torch.Tensor, width: int) -> bool:
    """Check bounds and 8-connectivity of a vertical seam."""
    if seam.dim() != 1 or seam.numel() == 0:
        return False
    if seam.min().item() < 0 or seam.max().item() >= width:
        return False
    if seam.numel() > 1 and torch.abs(seam[1:] - seam[:-1]).max().item() > 1:
        return False
    return True


def remove_seam(buffer: PixelBuffer, seam: torch.Tensor) -> PixelBuffer:
    """
    Remove a vertical seam from a pixel buffer in place.

    Args:
        buffer: Pixel buffer to shrink
        seam: Seam indices (H,)

    Returns:
        The same buffer, one column narrower

    Raises:
        DegenerateGeometryError: if the buffer is at most 1 pixel wide
        ValueError: if the seam does not fit the buffer
    """
    if buffer.width <= 1:
        raise DegenerateGeometryError(
            f"Cannot remove a seam from a {buffer.width}-pixel wide image")
    if seam.shape != (buffer.height,):
        raise ValueError(f"Seam length {tuple(seam.shape)} does not match height {buffer.height}")
    if not is_valid_seam(seam, buffer.width):
        raise ValueError(f"Seam is out of bounds or disconnected for width {buffer.width}")

    buffer.shrink(seam)
    return buffer
