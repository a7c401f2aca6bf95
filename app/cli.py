"""
airstrip — command-line front end for the cashflow projection engine.

  airstrip project "ic=150000&mrr=63000&..."      ledger for a shared link's state
  airstrip project --scenarios saved.json --name Base --summary
  airstrip encode                                 query string for the default set

A query that cannot be decoded falls back to the defaults (a warning is logged).
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

import pandas as pd

from assumptions.defaults import default_assumptions
from assumptions.model import AssumptionSet
from codec.state import encode_state, resolve_state
from core.utils import parse_year_month, resolve_start
from engine.runner import project
from scenarios.store import ScenarioDataError, ScenarioLibrary, ScenarioNotFound
from summary.ledger import projection_to_frame
from summary.metrics import summarize

logger = logging.getLogger(__name__)

_LEDGER_VIEW = [
    "mrr",
    "total_inflows",
    "payroll",
    "total_outflows",
    "net_cashflow",
    "cash_balance",
]


def _load_assumptions(args: argparse.Namespace) -> Optional[AssumptionSet]:
    defaults = default_assumptions()
    if args.scenarios:
        library = ScenarioLibrary.loads(Path(args.scenarios).read_text(encoding="utf-8"))
        if not args.name:
            logger.error("--name is required with --scenarios (have: %s)", ", ".join(library.names()))
            return None
        try:
            return library.get(args.name).assumptions(defaults)
        except ScenarioNotFound:
            logger.error("No scenario named %r", args.name)
            return None
        except ScenarioDataError as exc:
            logger.error("Cannot load saved scenario: %s", exc)
            return None
    return resolve_state(args.query, defaults)


def _cmd_project(args: argparse.Namespace) -> int:
    assumptions = _load_assumptions(args)
    if assumptions is None:
        return 1
    start = args.start or resolve_start(assumptions, date.today())

    periods = project(assumptions)
    frame = projection_to_frame(periods, start=start)
    columns = ["month"] + (list(frame.columns[1:]) if args.all_columns else _LEDGER_VIEW)
    with pd.option_context("display.max_rows", None, "display.width", 200):
        print(frame[columns].to_string(index=False))
        if args.summary:
            print()
            print(summarize(assumptions, periods).to_dataframe().to_string(index=False))
    return 0


def _cmd_encode(args: argparse.Namespace) -> int:
    print(encode_state(default_assumptions()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="airstrip", description="Monthly cashflow projection.")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("project", help="print the projected ledger")
    p.add_argument("query", nargs="?", default="", help="encoded state (query string)")
    p.add_argument("--scenarios", help="scenario library JSON file")
    p.add_argument("--name", help="scenario to load from --scenarios")
    p.add_argument(
        "--start",
        type=parse_year_month,
        help="first month, YYYY-MM (default: forecast start or this month)",
    )
    p.add_argument("--summary", action="store_true", help="also print headline metrics")
    p.add_argument("--all-columns", action="store_true", help="print every ledger column")
    p.set_defaults(func=_cmd_project)

    e = sub.add_parser("encode", help="print the encoded default assumptions")
    e.set_defaults(func=_cmd_encode)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
