"""
Projection engine — per-category cashflow rules and the monthly recurrence.
"""

from .period import ProjectionPeriod
from .runner import project

__all__ = ["ProjectionPeriod", "project"]
