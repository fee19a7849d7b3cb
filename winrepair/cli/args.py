from __future__ import annotations

import argparse
from typing import Optional, Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="winrepair",
        description="Run DISM + SFC repairs and write a technician report.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("run", "serve"),
        default="run",
        help="run: repair (default); serve: browse past reports in a web page",
    )
    parser.add_argument(
        "--mode",
        choices=("1", "2"),
        default=None,
        help="1 = current component store, 2 = local install media. Prompts when omitted.",
    )
    parser.add_argument(
        "--ini",
        default=None,
        help="INI file to use instead of APP_INI / WinRepair.ini",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
