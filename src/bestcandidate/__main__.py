"""
Print a best-candidate packing to stdout.

    $ python -m bestcandidate --width 320 --height 540 --seed 1
"""

import argparse
from typing import List, Optional

from .config import ConfigurationError, PackingConfig
from .packer import CirclePacker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bestcandidate",
        description="Generate a best-candidate circle packing and print one circle per line.",
    )
    parser.add_argument("--width", type=float, default=320)
    parser.add_argument("--height", type=float, default=540)
    parser.add_argument("--min-radius", type=float, default=1.0)
    parser.add_argument("--max-radius", type=float, default=30.0)
    parser.add_argument("-k", "--sample-size", type=int, default=30,
                        help="valid candidates drawn per circle on the first level")
    parser.add_argument("-n", "--per-radius", type=int, default=20,
                        help="circles placed at one radius before it shrinks")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--limit", type=int, default=None,
                        help="stop after this many circles")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = PackingConfig(
            min_radius=args.min_radius,
            max_radius=args.max_radius,
            initial_sample_size=args.sample_size,
            max_circles_per_radius=args.per_radius,
            verbose=args.verbose,
        )
        packer = CirclePacker(args.width, args.height, config, seed=args.seed)
    except ConfigurationError as exc:
        parser.error(str(exc))

    print(
        f"width = {args.width:g}, height = {args.height:g}, "
        f"min. radius = {args.min_radius:g}, max. radius = {args.max_radius:g}"
    )
    for count, circle in enumerate(packer, start=1):
        print(circle)
        if args.limit is not None and count >= args.limit:
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
