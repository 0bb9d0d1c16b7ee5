"""
Run with: python -m photowall [--images DIR] [--debug]
"""
from __future__ import annotations

import argparse
import sys

from photowall.main import main as run_app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="photowall", description="Curved parallax photo wall.")
    parser.add_argument("--images", help="Directory with the images to show (default: bundled gallery)")
    parser.add_argument("--rows", type=int, help="Number of tile rows")
    parser.add_argument("--columns", type=int, help="Number of tile columns")
    parser.add_argument("--seed", type=int, help="Seed for the per-tile animation randomness")
    parser.add_argument("--debug", action="store_true", help="Show the parameter tuning panel")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    return run_app(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
