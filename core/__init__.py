"""
Core package — configuration, short-key tables, and shared numeric/month helpers.
No business logic lives here.
"""

from .config import DEFAULT_CONFIG, ProjectionConfig
from .schema import COLLECTION_KEYS, SCALAR_KEYS
from .utils import month_labels, round_half_up

__all__ = [
    "DEFAULT_CONFIG",
    "ProjectionConfig",
    "COLLECTION_KEYS",
    "SCALAR_KEYS",
    "month_labels",
    "round_half_up",
]
