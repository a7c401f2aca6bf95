"""
Tabular view of a projection — one row per period, every ProjectionPeriod field.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

import pandas as pd

from core.utils import month_labels
from engine.period import ProjectionPeriod

LEDGER_COLUMNS: List[str] = list(ProjectionPeriod.__dataclass_fields__)


def projection_to_frame(
    periods: Sequence[ProjectionPeriod],
    *,
    start: Optional[date] = None,
) -> pd.DataFrame:
    """
    Build the ledger DataFrame.

    Parameters
    ----------
    periods : sequence of ProjectionPeriod
        Output of engine.project()
    start : date, optional
        First projected month. When given, a "month" label column is added.
    """
    df = pd.DataFrame([p.to_dict() for p in periods], columns=LEDGER_COLUMNS)
    if start is not None:
        df.insert(0, "month", month_labels(start, len(df)))
    return df
