"""
Legacy flat encoding for annual plan revenue and capital injections.

Old links carried these collections as comma-separated ``index:value`` pairs,
e.g. ``apr=0:500,3:1200``. Pairs with a missing, zero or non-numeric value are
skipped (they never carried money). Rebuilt items get sequential ids and a
fixed description; both are lossy and accepted as such.
"""

from __future__ import annotations

from typing import Tuple

from assumptions.items import DatedAmount
from core.utils import parse_float_prefix, parse_int_prefix

from .errors import DecodeFailure


def parse_legacy_pairs(raw: str, description: str, *, key: str) -> Tuple[DatedAmount, ...]:
    items = []
    for pair in raw.split(","):
        idx, _, val = pair.partition(":")
        amount = parse_float_prefix(val) if val else float("nan")
        if amount != amount or amount == 0:
            continue
        month = parse_int_prefix(idx)
        if month is None:
            raise DecodeFailure(f"Legacy pair {pair!r} has no month index.", key=key)
        items.append(
            DatedAmount(
                id=len(items) + 1,
                description=description,
                month=month,
                amount=amount,
                hidden=False,
            )
        )
    return tuple(items)
