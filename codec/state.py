"""
Compact state codec — AssumptionSet <-> flat ``key=value&...`` string.

Used for shareable links (the query string) and anywhere a scenario must fit
in a single string. The short keys live in core.schema and are shared with
links already in circulation.

Decoding overlays recognised keys onto a caller-supplied default set. It is
all or nothing: any malformed value raises DecodeFailure and nothing is
applied. `load_state` / `resolve_state` wrap that policy for callers that
must keep rendering.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlencode

from pydantic import ValidationError

from assumptions.model import AssumptionSet
from core.config import DEFAULT_CONFIG
from core.schema import LEGACY_COLLECTION_KEYS, OPTIONAL_SCALAR_KEYS, PRESENCE_KEYS, SCALAR_KEYS
from core.utils import (
    format_number,
    format_year_month,
    parse_float_prefix,
    parse_int_prefix,
    parse_year_month,
)

from .errors import DecodeFailure
from .legacy import parse_legacy_pairs
from .wire import COLLECTION_CODECS, CollectionCodec

logger = logging.getLogger(__name__)

_LEGACY_DESCRIPTIONS = {
    "apr": DEFAULT_CONFIG.legacy_annual_plan_description,
    "ci": DEFAULT_CONFIG.legacy_capital_injection_description,
}


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------

def encode_params(assumptions: AssumptionSet) -> List[Tuple[str, str]]:
    """Ordered (key, value) pairs. Unset optional scalars are left out."""
    a = assumptions
    params: List[Tuple[str, str]] = []
    for key, attr in SCALAR_KEYS.items():
        value = getattr(a, attr)
        if key in OPTIONAL_SCALAR_KEYS and value is None:
            continue
        if key == "fsd":
            params.append((key, format_year_month(value)))
        elif key == "nm":
            params.append((key, str(int(value))))
        else:
            params.append((key, format_number(value)))

    for codec in COLLECTION_CODECS:
        rows = codec.dump(getattr(a, codec.attr))
        params.append((codec.key, json.dumps(rows, separators=(",", ":"), ensure_ascii=False)))
    return params


def encode_state(assumptions: AssumptionSet) -> str:
    """URL query string (without the leading '?')."""
    return urlencode(encode_params(assumptions))


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------

def _parse_params(serialized: str) -> Dict[str, str]:
    text = serialized.strip()
    if text.startswith("?"):
        text = text[1:]
    params: Dict[str, str] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        params.setdefault(key, value)  # first occurrence wins
    return params


def _money(raw: str) -> float:
    value = parse_float_prefix(raw)
    return 0.0 if math.isnan(value) or value == 0 else value


def _decode_scalar(key: str, raw: str, defaults: AssumptionSet) -> Any:
    if key == "nm":
        n = parse_int_prefix(raw)
        return defaults.number_of_months if n is None else n
    if key == "fsd":
        try:
            return parse_year_month(raw)
        except ValueError as exc:
            raise DecodeFailure(str(exc), key=key) from exc
    if key in ("cymin", "cymax"):
        value = parse_float_prefix(raw)
        return None if math.isnan(value) else value
    return _money(raw)


def _structured_rows(raw: str) -> Optional[List[Any]]:
    """JSON array of rows, or None when `raw` is not in the structured form."""
    try:
        rows = json.loads(raw)
    except ValueError:
        return None
    return rows if isinstance(rows, list) else None


def _decode_collection(codec: CollectionCodec, raw: str, defaults: AssumptionSet) -> tuple:
    rows = _structured_rows(raw)
    if rows is None:
        if codec.key not in LEGACY_COLLECTION_KEYS:
            raise DecodeFailure(f"'{codec.key}' is not a JSON array.", key=codec.key)
        items = parse_legacy_pairs(raw, _LEGACY_DESCRIPTIONS[codec.key], key=codec.key)
        logger.debug("Decoded legacy '%s' blob into %d items", codec.key, len(items))
        # an empty legacy blob leaves the defaults in place
        return items if items else getattr(defaults, codec.attr)
    try:
        return codec.load(rows)
    except ValidationError as exc:
        raise DecodeFailure(f"Malformed '{codec.key}' items: {exc}", key=codec.key) from exc


def decode_state(serialized: Optional[str], defaults: AssumptionSet) -> Optional[AssumptionSet]:
    """
    Overlay a serialized state onto `defaults`.

    Returns None ("no override") when the input is empty or carries neither
    presence key. Unknown keys are ignored. Raises DecodeFailure on any
    malformed value; nothing is applied in that case.
    """
    if not serialized:
        return None
    params = _parse_params(serialized)
    if not any(k in params for k in PRESENCE_KEYS):
        return None

    changes: Dict[str, Any] = {}
    for key, attr in SCALAR_KEYS.items():
        if key in params:
            changes[attr] = _decode_scalar(key, params[key], defaults)
    for codec in COLLECTION_CODECS:
        if codec.key in params:
            changes[codec.attr] = _decode_collection(codec, params[codec.key], defaults)
    return replace(defaults, **changes)


def load_state(serialized: Optional[str], defaults: AssumptionSet) -> Optional[AssumptionSet]:
    """decode_state() that logs failures and reports them as "no override"."""
    try:
        return decode_state(serialized, defaults)
    except DecodeFailure as exc:
        logger.warning("Discarding unparseable state (key=%s): %s", exc.key, exc)
        return None


def resolve_state(serialized: Optional[str], defaults: AssumptionSet) -> AssumptionSet:
    """The decoded set, or `defaults` when there is nothing usable."""
    decoded = load_state(serialized, defaults)
    return decoded if decoded is not None else defaults
