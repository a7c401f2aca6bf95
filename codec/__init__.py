"""
Compact state codec — query-string encoding of an AssumptionSet, with the
legacy fallback for old annual-plan / capital-injection links.
"""

from .errors import DecodeFailure
from .state import decode_state, encode_state, load_state, resolve_state

__all__ = [
    "DecodeFailure",
    "decode_state",
    "encode_state",
    "load_state",
    "resolve_state",
]
