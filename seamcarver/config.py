"""
Configuration surface for the command-line carver.

Settings come from command-line flags, falling back to SEAMCARVER_*
environment variables. Values read from the environment are checked
against the same choices as their flags.
"""

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .seam import START_POLICIES

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class CarveSettings:
    """Everything one CLI run needs: input, stopping mode and diagnostics."""

    image_path: str
    output_path: str
    seams: Optional[int]
    target_width: Optional[int]
    fit: bool
    start: str
    seed: Optional[int]
    energy_dir: Optional[str]
    report_energy: bool
    log_level: str

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CarveSettings":
        return cls(
            image_path=args.image,
            output_path=args.output or os.getenv("SEAMCARVER_OUTPUT", "output.png"),
            seams=args.seams,
            target_width=args.width,
            fit=args.fit,
            start=args.start or os.getenv("SEAMCARVER_START", "min").lower(),
            seed=args.seed,
            energy_dir=args.dump_energy,
            report_energy=args.report_energy,
            log_level=(args.log_level or os.getenv("SEAMCARVER_LOG_LEVEL", "INFO")).upper(),
        )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for `python -m seamcarver`."""
    parser = argparse.ArgumentParser(
        prog="seamcarver",
        description="Content-aware image shrinking by vertical seam removal"
    )
    parser.add_argument('image', help='Input image path')

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        '--seams',
        type=_non_negative_int,
        help='Number of seams to remove'
    )
    mode.add_argument(
        '--width',
        type=_positive_int,
        help='Shrink until the image is this wide'
    )
    mode.add_argument(
        '--fit',
        action='store_true',
        help='Open a window and shrink the image to fit its width'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output image path (default: $SEAMCARVER_OUTPUT or output.png)'
    )
    parser.add_argument(
        '--start',
        choices=START_POLICIES,
        help="Bottom-row seam start: 'min' cost (default) or 'random'"
    )
    parser.add_argument(
        '--seed',
        type=int,
        help="Seed for --start random"
    )
    parser.add_argument(
        '--dump-energy',
        type=str,
        metavar='DIR',
        help='Write lum.png and grad.png of the input image to DIR'
    )
    parser.add_argument(
        '--report-energy',
        action='store_true',
        help='Log min/max of the energy maps every iteration'
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        help='Logging level (default: $SEAMCARVER_LOG_LEVEL or INFO)'
    )
    return parser


def parse_settings(argv=None) -> CarveSettings:
    """
    Parse the command line into CarveSettings.

    Environment fallbacks that are not valid choices end the run through
    parser.error (exit status 2), like a bad flag would.
    """
    parser = build_parser()
    settings = CarveSettings.from_args(parser.parse_args(argv))

    if settings.start not in START_POLICIES:
        parser.error(f"SEAMCARVER_START must be one of {', '.join(START_POLICIES)}, "
                     f"got {settings.start!r}")
    if settings.log_level not in LOG_LEVELS:
        parser.error(f"SEAMCARVER_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
                     f"got {settings.log_level!r}")
    return settings


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install a [SEAM-CARVER] prefixed root handler and return the package logger."""
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}. Must be one of {LOG_LEVELS}")
    logging.basicConfig(level=level, format="[SEAM-CARVER] %(message)s")
    return logging.getLogger("seamcarver")
