"""Exceptions raised by the seam carver and its I/O collaborators."""


class SeamCarverError(Exception):
    """Base class for all seam carver errors."""


class LoadError(SeamCarverError):
    """An image could not be decoded into a pixel buffer."""


class WriteError(SeamCarverError):
    """A pixel buffer could not be encoded or persisted."""


class DegenerateGeometryError(SeamCarverError):
    """A seam removal would leave the image less than one pixel wide."""
