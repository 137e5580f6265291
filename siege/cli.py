"""Command line front end: generate an engine from a template file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from siege import config
from siege.generator import Generator
from siege.render import to_image, to_svg
from siege.template import TemplateError
from siege.util import rng

FORMATS = ("ascii", "svg", "png")


def _load_generator(template: Path | None, pin_top_mid: bool) -> Generator:
    if template is None:
        return Generator.default(pin_top_mid=pin_top_mid)
    if template.suffix.lower() == ".csv":
        return Generator.from_csv_file(template, pin_top_mid=pin_top_mid)
    return Generator.from_ascii_file(template, pin_top_mid=pin_top_mid)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siege", description="Generate a siege engine skeleton from a template"
    )
    parser.add_argument(
        "template",
        type=Path,
        nargs="?",
        help="ASCII (.txt) or CSV (.csv) template; the bundled default if omitted",
    )
    parser.add_argument(
        "-f", "--format", choices=FORMATS, default="ascii", help="Output format"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (required for png, stdout otherwise)",
    )
    parser.add_argument(
        "-W",
        "--width",
        type=int,
        default=config.DEFAULT_OUTPUT_WIDTH,
        help=f"Output width (default: {config.DEFAULT_OUTPUT_WIDTH})",
    )
    parser.add_argument(
        "-H",
        "--height",
        type=int,
        default=config.DEFAULT_OUTPUT_HEIGHT,
        help=f"Output height (default: {config.DEFAULT_OUTPUT_HEIGHT})",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=config.DEFAULT_RETRIES,
        help=f"Extra attempts after a contradiction (default: {config.DEFAULT_RETRIES})",
    )
    parser.add_argument("--seed", type=str, help="Master seed for reproducible output")
    parser.add_argument(
        "--pin-top-mid",
        action="store_true",
        default=config.PIN_TOP_MID,
        help="Keep the template's top edge midpoint",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.width < 1 or args.height < 1:
        parser.error("width and height must be at least 1")
    if args.format == "png" and args.output is None:
        parser.error("png output needs --output")

    rng.init(args.seed if args.seed is not None else config.RANDOM_SEED)

    try:
        generator = _load_generator(args.template, args.pin_top_mid)
    except TemplateError as e:
        print(f"Invalid template: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Cannot read template: {e}", file=sys.stderr)
        return 2

    engine = generator.generate(
        args.width, args.height, args.retries, rng.get("siege.generate")
    )
    if engine is None:
        print(
            f"No engine found after {args.retries + 1} attempts; "
            "try more --retries or another size",
            file=sys.stderr,
        )
        return 1

    if args.format == "png":
        to_image(engine).save(args.output)
        print(f"Written PNG output to file {args.output}")
        return 0

    text = engine.to_ascii() if args.format == "ascii" else to_svg(engine)
    if args.output is None:
        print(text)
    else:
        args.output.write_text(text + "\n")
        print(f"Written {args.format} output to file {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
