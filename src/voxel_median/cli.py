"""Median filter a NumPy volume from the command line."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import msgspec
import numpy as np

from .config import MedianFilterConfig, parse_extent
from .filter import median_filter_3d
from .median3d import ExtentError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voxel-median",
        description="Smooth images using median filtering.",
    )
    parser.add_argument("input", type=Path, help="input volume (.npy) to be median-filtered")
    parser.add_argument("output", type=Path, help="the output volume (.npy)")
    parser.add_argument(
        "--extent",
        default=None,
        help=(
            "extent of the median filtering neighbourhood in voxels, either a single "
            "value for all 3 axes or a comma-separated list of 3 values, one per axis "
            "(default: 3x3x3)"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with filter settings; --extent takes precedence",
    )
    parser.add_argument("--progress", action="store_true", help="show a progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.extent is not None:
            config = MedianFilterConfig(extent=parse_extent(args.extent))
        elif args.config is not None:
            config = MedianFilterConfig.from_json_file(args.config)
        else:
            config = MedianFilterConfig()
    except (ExtentError, msgspec.ValidationError) as e:
        parser.error(str(e))

    data = np.load(args.input)
    logger.debug("loaded %s with shape %s, dtype %s", args.input, data.shape, data.dtype)

    result = median_filter_3d(
        data, config.full_extent(), name=args.input.name, progress=args.progress
    )
    np.save(args.output, result)
    logger.debug("wrote %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
