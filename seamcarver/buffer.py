"""
Shrinkable RGBA pixel buffer.

The buffer keeps its physical backing tensor (H, capacity, 4) for its whole
life and tracks a separate logical width. Seam removal compacts every row
to the left, so columns [0, width) are always contiguous and valid and no
reallocation happens while carving.
"""

import numpy as np
import torch

from .errors import DegenerateGeometryError


class PixelBuffer:
    """
    Row-major grid of RGBA8 texels with a logical width.

    Args:
        pixels: uint8 tensor (H, W, 4). The buffer takes ownership of it.
    """

    def __init__(self, pixels: torch.Tensor):
        if pixels.dim() != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA tensor, got shape {tuple(pixels.shape)}")
        if pixels.dtype != torch.uint8:
            raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Pixel buffer must be at least 1x1")

        self._data = pixels.contiguous()
        self._width = pixels.shape[1]

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'PixelBuffer':
        """
        Build a buffer from a uint8 array of shape (H, W, 4), (H, W, 3) or (H, W).

        RGB input gets an opaque alpha channel; grayscale input is broadcast
        to all three colour channels.
        """
        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {array.dtype}")

        if array.ndim == 2:
            array = np.stack([array, array, array], axis=-1)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported array shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=-1)

        return cls(torch.from_numpy(np.ascontiguousarray(array).copy()))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def capacity(self) -> int:
        """Physical width of the backing store (the original image width)."""
        return self._data.shape[1]

    @property
    def shape(self):
        return (self.height, self._width, 4)

    @property
    def pixels(self) -> torch.Tensor:
        """View of the valid region, (H, width, 4). Not a copy."""
        return self._data[:, :self._width]

    def to_numpy(self) -> np.ndarray:
        return np.ascontiguousarray(self.pixels.cpu().numpy())

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.pixels.clone())

    def shrink(self, seam: torch.Tensor):
        """
        Remove pixel (seam[y], y) from every row, in place.

        Everything right of the seam shifts one column left; the freed
        right-most column is cleared. The seam is assumed to be valid for
        the current width (see seam.remove_seam for the checked variant).

        Raises:
            DegenerateGeometryError: if the buffer is already 1 pixel wide
        """
        H, W = self.height, self._width
        if W <= 1:
            raise DegenerateGeometryError(f"Cannot remove a seam from a {W}-pixel wide image")

        keep = torch.ones(H, W, dtype=torch.bool, device=self._data.device)
        keep[torch.arange(H, device=self._data.device), seam.to(self._data.device)] = False

        # Boolean indexing walks rows in order, so the result reshapes cleanly
        compacted = self._data[:, :W][keep].view(H, W - 1, 4)
        self._data[:, :W - 1] = compacted
        self._data[:, W - 1] = 0
        self._width = W - 1

    def __repr__(self):
        return f"PixelBuffer(width={self._width}, height={self.height}, capacity={self.capacity})"
