"""
Interactive shrink-to-fit viewer.

The render loop owns the frame cadence; the carver only exposes
advance()/current(). Each frame the loop reads the window width and asks
the ResizeDriver to remove at most one seam while the image is wider.
"""

import logging

import matplotlib.pyplot as plt

from .carving import MIN_WIDTH, SeamCarver

logger = logging.getLogger(__name__)


class ResizeDriver:
    """Advance a SeamCarver toward a live target width, one seam per frame."""

    def __init__(self, carver: SeamCarver):
        self.carver = carver

    def frame(self, target_width: int) -> bool:
        """
        Run one frame's worth of carving.

        Returns:
            True if the buffer changed and the display needs a new upload
        """
        target_width = max(MIN_WIDTH, int(target_width))
        if target_width >= self.carver.width:
            return False
        return self.carver.advance() is not None


def _canvas_width(fig) -> int:
    return int(fig.get_size_inches()[0] * fig.dpi)


def attach_frame_upload(carver: SeamCarver, fig, image):
    """
    Re-upload the displayed image from the carver's on_seam hook.

    Any hook already installed keeps running after the upload.

    Returns:
        The previous hook, so the caller can restore it
    """
    previous = carver.on_seam

    def upload(c, seam):
        image.set_data(c.current().cpu().numpy())
        fig.canvas.draw_idle()
        if previous is not None:
            previous(c, seam)

    carver.on_seam = upload
    return previous


def run_viewer(carver: SeamCarver, interval: float = 1 / 60,
               title: str = "Seam Carver") -> int:
    """
    Show the carver's buffer in a resizable window and shrink it to fit.

    Returns when the window is closed.

    Args:
        carver: Carver whose buffer is displayed and shrunk
        interval: Seconds to wait per frame
        title: Window title

    Returns:
        Number of seams removed while the window was open
    """
    driver = ResizeDriver(carver)
    start_count = carver.seams_removed

    dpi = 100
    fig = plt.figure(figsize=(carver.width / dpi, carver.height / dpi), dpi=dpi)
    fig.canvas.manager.set_window_title(title)
    image = fig.figimage(carver.current().cpu().numpy(), xo=0, yo=0, origin='upper')
    previous = attach_frame_upload(carver, fig, image)

    plt.show(block=False)
    try:
        while plt.fignum_exists(fig.number):
            driver.frame(_canvas_width(fig))
            plt.pause(interval)
    finally:
        carver.on_seam = previous

    removed = carver.seams_removed - start_count
    logger.info("Viewer closed after %d seams, size: %dx%d",
                removed, carver.width, carver.height)
    return removed
