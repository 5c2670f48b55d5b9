from __future__ import annotations

import argparse

from getset import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="getset",
        description="Run commands from a TOML file sequentially",
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="getset.toml",
        help="Path to the file containing commands (defaults to getset.toml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show verbose logging",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Show profiling report at the end",
    )
    parser.add_argument(
        "--step",
        default=None,
        help="Run only steps matching this substring (case-insensitive)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser
