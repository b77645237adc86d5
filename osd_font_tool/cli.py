"""
cli.py - Command line entry point.

Usage:
  osd-font-tool convert bin:font.bin tilegrid:grid.png
  osd-font-tool convert -s sym_specs.yaml tiledir:tiles symdir:symbols
  osd-font-tool -l debug convert-set binsetnorm:fonts tilesetgridsnorm:grids:ardu
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .convert import DEFAULT_SYMBOL_SPECS_FILE, convert, convert_set
from .errors import FontToolError

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def setup_logging(level: str = "info") -> None:
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.CRITICAL + 1),   # "off" silences everything
        format="%(levelname)-5s > %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="osd-font-tool", description="Convert OSD font tiles between formats")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument(
        "-l", "--log-level",
        choices=["error", "warn", "info", "debug", "off"],
        default="info",
        help="Log level (default: info)",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("convert", "Convert a tile collection (bin:, tilegrid:, tiledir:, symdir:, avatar:)"),
        ("convert-set", "Convert an SD/HD tile set (binset:, binsetnorm:, tilesetgrids:, "
                        "tilesetgridsnorm:, tilesetdir:, symsetdir:)"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "-s", "--symbol-specs-file",
            default=DEFAULT_SYMBOL_SPECS_FILE,
            help=f"Symbol specs file used for symbol outputs (default: {DEFAULT_SYMBOL_SPECS_FILE})",
        )
        cmd.add_argument("from_arg", metavar="FROM", help="Source, as prefix:path")
        cmd.add_argument("to_arg", metavar="TO", help="Destination, as prefix:path")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    run = convert if args.command == "convert" else convert_set
    try:
        run(args.from_arg, args.to_arg, args.symbol_specs_file)
    except (FontToolError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
