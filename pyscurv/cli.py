"""
Command line tool: estimate the SCurV (210) descriptor of a point cloud with normals.

Usage:
    pyscurv-estimate input.pcd output.pcd [-k K] [--log-file F] [-v]
"""
import argparse
import sys

from .config import DEFAULT_CONFIG, SCurVConfig
from .descriptor import SCurVEstimation
from .errors import ScurvError
from .io import load_cloud, save_signature
from .logger import LogLevel, ScurvLogger, get_logger, set_logger


def build_parser():
    parser = argparse.ArgumentParser(
        prog='pyscurv-estimate',
        description="Estimate SCurV (210) descriptors of a point cloud with normals.",
    )
    parser.add_argument('input', help="input point cloud with normals (.pcd, .ply, ...)")
    parser.add_argument('output', help="output signature file (.pcd, .npy or text)")
    parser.add_argument(
        '-k', type=int, default=DEFAULT_CONFIG.k,
        help=f"use a fixed number of k-nearest neighbors around each point (default: {DEFAULT_CONFIG.k})",
    )
    parser.add_argument('--log-file', default=None, help="also write the log to this file")
    parser.add_argument('-v', '--verbose', action='store_true', help="print debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    console_level = LogLevel.DEBUG if args.verbose else LogLevel.INFO
    mode = 'both' if args.log_file else 'console'
    set_logger(ScurvLogger(mode=mode, log_file=args.log_file, console_level=console_level))
    logger = get_logger()

    # k <= 1 keeps the default
    config = SCurVConfig(k=args.k) if args.k > 1 else DEFAULT_CONFIG

    try:
        with logger.timed(f"Loading {args.input}"):
            cloud = load_cloud(args.input)
        logger.info(f"{len(cloud)} points")

        with logger.timed(f"Computing with {config.k}-nearest neighbors"):
            output = SCurVEstimation().compute(cloud, config)

        with logger.timed(f"Saving {args.output}"):
            save_signature(args.output, output)
    except (ScurvError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
