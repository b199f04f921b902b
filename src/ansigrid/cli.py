import argparse
import logging
import sys
from pathlib import Path

from ansigrid.converter import image_to_ansi
from ansigrid.engine import Tier
from ansigrid.terminal import detect_tier, get_terminal_size

TIERS = {tier.value: tier for tier in Tier}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an image as coloured terminal text")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-s", "--size", type=int, default=None, help="Output width in columns (default: terminal width)"
    )
    parser.add_argument(
        "-t",
        "--tier",
        default=None,
        choices=list(TIERS),
        help="Colour capability of the target terminal (default: detected from TERM/COLORTERM)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    args = parser.parse_args(argv)
    if args.size is not None and args.size <= 0:
        parser.error("--size must be a positive number of columns")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")

    width = args.size if args.size is not None else get_terminal_size()[0]
    tier = TIERS[args.tier] if args.tier is not None else detect_tier()

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.buffer.write(image_to_ansi(image_path, tier, width=width))
    sys.stdout.buffer.flush()
