"""Command-line entry point: python -m seamcarver IMAGE --seams N."""

import sys
from pathlib import Path

from .carving import SeamCarver
from .config import configure_logging, parse_settings
from .energy import energy_range, gradient_energy, luminance
from .errors import LoadError, WriteError
from .image_io import load_image, save_energy_map, save_image


def dump_energy_maps(buffer, out_dir):
    """Write lum.png and grad.png for the current buffer into out_dir."""
    lum = luminance(buffer)
    energy_range("Luminance", lum)
    save_energy_map(Path(out_dir) / "lum.png", lum, normalize=False)

    grad = gradient_energy(lum)
    energy_range("Gradient", grad)
    save_energy_map(Path(out_dir) / "grad.png", grad, normalize=True)


def main(argv=None) -> int:
    settings = parse_settings(argv)
    log = configure_logging(settings.log_level)

    try:
        buffer = load_image(settings.image_path)
    except LoadError as e:
        log.error("Error: %s", e)
        return 1

    carver = SeamCarver(buffer, start=settings.start, seed=settings.seed,
                        report_energy=settings.report_energy)
    original_width = carver.width

    try:
        if settings.energy_dir:
            dump_energy_maps(buffer, settings.energy_dir)

        if settings.fit:
            from .viewer import run_viewer
            run_viewer(carver, title=f"Seam Carver - {Path(settings.image_path).name}")
        elif settings.target_width is not None:
            carver.carve_to_width(settings.target_width)
        else:
            carver.carve(settings.seams)

        log.info("Carved %dx%d -> %dx%d (%d seams)", original_width, carver.height,
                 carver.width, carver.height, carver.seams_removed)
        save_image(settings.output_path, carver.buffer)
    except WriteError as e:
        log.error("Error: %s", e)
        log.error("Carved image was %dx%d when the write failed", carver.width, carver.height)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
