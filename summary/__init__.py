"""
Projection outputs — ledger table, headline metrics and flags.
"""

from .ledger import projection_to_frame
from .metrics import ProjectionSummary, summarize, terminal_mrr

__all__ = [
    "projection_to_frame",
    "ProjectionSummary",
    "summarize",
    "terminal_mrr",
]
