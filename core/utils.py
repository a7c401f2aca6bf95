from __future__ import annotations

import math
import re
from datetime import date
from typing import List, Optional, Union

import numpy as np
from dateutil.relativedelta import relativedelta

_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


def round_half_up(x: float) -> float:
    """Round to the nearest whole unit, halves toward +inf. NaN/inf pass through."""
    return float(np.floor(np.float64(x) + 0.5))


def parse_float_prefix(text: Optional[str]) -> float:
    """Parse the leading number of a string (``"12.5abc" -> 12.5``); NaN if there is none."""
    if text is None:
        return math.nan
    m = _FLOAT_PREFIX.match(str(text))
    if not m:
        return math.nan
    token = m.group(1).replace("Infinity", "inf")
    return float(token)


def parse_int_prefix(text: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a string; None if there is none."""
    if text is None:
        return None
    m = _INT_PREFIX.match(str(text))
    return int(m.group(1)) if m else None


def compact_number(value: float) -> Union[int, float]:
    """Integral floats as int so they serialize as ``5000`` rather than ``5000.0``."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def format_number(value: float) -> str:
    """Query-string spelling; non-finite values use the tokens parse_float_prefix reads."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return str(compact_number(value))


def parse_year_month(text: str) -> date:
    """``"2026-03"`` -> ``date(2026, 3, 1)``. Raises ValueError on anything else."""
    m = _YEAR_MONTH.match(text.strip())
    if not m:
        raise ValueError(f"Expected YYYY-MM, got {text!r}")
    return date(int(m.group(1)), int(m.group(2)), 1)


def format_year_month(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def month_labels(start: date, n_months: int) -> List[str]:
    """
    Short labels ("Jan 26") for each period index, starting at the month of `start`.
    """
    first = month_start(start)
    return [(first + relativedelta(months=k)).strftime("%b %y") for k in range(max(n_months, 0))]


def resolve_start(assumptions, today: date) -> date:
    """
    First projected month: the explicit forecast start, else the month of `today`.
    Callers pass `today` so projections stay reproducible.
    """
    start = assumptions.forecast_start_date
    return month_start(start if start is not None else today)
