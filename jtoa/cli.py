#!/usr/bin/env python3
# jtoa/cli.py
"""
Entry point for jtoa.
Parses the command line into RenderOptions and converts each operand in turn.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import List, Optional, Sequence

from jtoa.config import Config, RenderOptions, SizingMode
from jtoa.convert import convert_stream
from jtoa.errors import FileOpenFailure, InvalidArguments, JtoaError
from jtoa.logging_conf import setup_logging
from jtoa.rendering.palette import MAX_PALETTE_LENGTH, Palette
from jtoa.version import version_info

logger = logging.getLogger(__name__)

USAGE = "jtoa [ options ] [ file(s) ]"
DESCRIPTION = "Convert image files (JPEG and anything else Pillow reads) to ASCII."
EPILOG = "  The default running mode is 'jtoa --width=78'"

_SIZE_RE = re.compile(r"^(-?\d+)x(-?\d+)$")


# -------------------------
# Argument parsing
# -------------------------

class _Parser(argparse.ArgumentParser):
    def error(self, message):
        if message.startswith("unrecognized arguments: "):
            message = "Unknown option " + message[len("unrecognized arguments: "):]
        raise InvalidArguments(message)


class _WidthAction(argparse.Action):
    """--width=N: fix the width, lean towards deriving the height."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.width = values
        namespace.auto_height += 1


class _HeightAction(argparse.Action):
    """--height=N: fix the height, lean towards deriving the width."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.height = values
        namespace.auto_width += 1


class _SizeAction(argparse.Action):
    """--size=WxH: fix both and clear whatever sizing flags came before."""

    def __call__(self, parser, namespace, values, option_string=None):
        m = _SIZE_RE.match(values)
        if not m:
            parser.error(f"Invalid size '{values}', expected WxH")
        namespace.width = int(m.group(1))
        namespace.height = int(m.group(2))
        namespace.auto_width = namespace.auto_height = 0


def _chars(value: str) -> str:
    if len(value) > MAX_PALETTE_LENGTH:
        raise argparse.ArgumentTypeError("Too many ascii characters specified.")
    return value


def build_parser(cfg: Config) -> argparse.ArgumentParser:
    render = cfg["render"]
    p = _Parser(
        prog="jtoa",
        usage=USAGE,
        description=DESCRIPTION,
        epilog=EPILOG,
        add_help=False,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("files", nargs="*", metavar="file",
                   help="Image file to convert, or '-' for standard input.")
    p.add_argument("--chars", type=_chars, default=render["chars"],
                   help="Palette from white (left) to black (right), reversed by --invert "
                        "(specify at least 2 characters).")
    p.add_argument("--flipx", action="store_true", default=render["flipx"],
                   help="Flip image in X direction.")
    p.add_argument("--flipy", action="store_true", default=render["flipy"],
                   help="Flip image in Y direction.")
    p.add_argument("--height", type=int, action=_HeightAction, metavar="N",
                   help="Set output height, calculate width from aspect ratio.")
    p.add_argument("-h", "--help", action="store_true",
                   help="Print program help.")
    p.add_argument("-i", "--invert", action="store_true", default=render["invert"],
                   help="Invert output image. Use if your display has a dark background.")
    p.add_argument("--size", action=_SizeAction, metavar="WxH",
                   help="Set output width and height.")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Verbose output.")
    p.add_argument("--version", action="version", version=version_info())
    p.add_argument("--width", type=int, action=_WidthAction, metavar="N",
                   help="Set output width, calculate height from ratio.")
    p.set_defaults(width=render["width"], height=0, auto_width=0, auto_height=1)
    return p


def options_from_args(ns: argparse.Namespace) -> RenderOptions:
    """Resolve the sizing flags and validate everything into RenderOptions."""
    if not ns.files:
        raise InvalidArguments("No files specified.")

    auto_width, auto_height = ns.auto_width, ns.auto_height
    # only --height given: derive the width instead
    if auto_width == 1 and auto_height == 1:
        auto_height = 0
    if auto_width == 2 and auto_height == 1:
        auto_width = auto_height = 0

    palette = Palette(ns.chars)

    width, height = ns.width, ns.height
    if (width < 1 and not auto_width) or (height < 1 and not auto_height):
        raise InvalidArguments("Invalid width or height specified.")

    if auto_width and not auto_height:
        mode = SizingMode.DERIVE_WIDTH
    elif auto_height and not auto_width:
        mode = SizingMode.DERIVE_HEIGHT
    else:
        mode = SizingMode.FIXED
        if width < 1 or height < 1:
            raise InvalidArguments("Invalid width or height specified.")

    return RenderOptions(
        palette=palette,
        width=width,
        height=height,
        mode=mode,
        invert=ns.invert,
        flipx=ns.flipx,
        flipy=ns.flipy,
        verbose=ns.verbose,
    )


# -------------------------
# Batch
# -------------------------

def _emit(lines: List[str]) -> None:
    out = sys.stdout
    for line in lines:
        out.write(line)
        out.write("\n")
    out.flush()


def run(files: Sequence[str], options: RenderOptions) -> None:
    """Convert every operand in order; the first failure stops the batch."""
    for name in files:
        if name == "-":
            _emit(convert_stream(sys.stdin.buffer, options))
            continue
        try:
            fp = open(name, "rb")
        except OSError as exc:
            raise FileOpenFailure(f"Can't open {name}") from exc
        with fp:
            logger.info("File: %s", name)
            _emit(convert_stream(fp, options))


def main(argv: Optional[Sequence[str]] = None) -> int:
    cfg = Config.load()
    parser = build_parser(cfg)
    try:
        ns = parser.parse_intermixed_args(argv)
        if ns.help:
            parser.print_help(sys.stderr)
            return 0
        options = options_from_args(ns)
    except InvalidArguments as exc:
        print(f"{exc}\n", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    setup_logging(cfg, options.verbose)
    try:
        run(ns.files, options)
    except JtoaError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
