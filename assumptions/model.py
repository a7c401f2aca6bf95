"""
AssumptionSet — the complete, immutable input to one projection run.

The calling layer owns mutation: every edit produces a new AssumptionSet
(see assumptions.editing) and the engine is re-run on the result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Dict, Iterator, Optional, Tuple, Type

from core.config import DEFAULT_CONFIG
from core.schema import CAMEL_CASE_FIELDS
from core.utils import format_year_month, parse_year_month

from .items import DatedAmount, Employee, LineItem, RecurringAmount, RecurringPercentage

# collection attribute -> item variant, in ledger order
COLLECTION_VARIANTS: Dict[str, Type] = {
    "annual_plan_revenue": DatedAmount,
    "capital_injections": DatedAmount,
    "employees": Employee,
    "recurring_expenses": RecurringAmount,
    "one_time_expenses": DatedAmount,
    "variable_expenses": RecurringPercentage,
    "refunds": RecurringAmount,
    "owners_draw": RecurringAmount,
    "owners_401k": DatedAmount,
    "estimated_taxes": DatedAmount,
}


@dataclass(frozen=True)
class AssumptionSet:
    # revenue drivers
    initial_cash: float = 0.0
    starting_mrr: float = 0.0
    new_customers_per_month: float = 0.0
    arpu: float = 0.0
    monthly_churn_rate: float = 0.0  # percent
    additional_revenue: float = 0.0
    additional_revenue_growth: float = 0.0  # percent, may be negative

    # horizon and presentation
    number_of_months: int = DEFAULT_CONFIG.default_months
    forecast_start_date: Optional[date] = None  # None -> editing layer picks "this month"
    chart_y_min: Optional[float] = None
    chart_y_max: Optional[float] = None

    # line items
    annual_plan_revenue: Tuple[DatedAmount, ...] = ()
    capital_injections: Tuple[DatedAmount, ...] = ()
    employees: Tuple[Employee, ...] = ()
    recurring_expenses: Tuple[RecurringAmount, ...] = ()
    one_time_expenses: Tuple[DatedAmount, ...] = ()
    variable_expenses: Tuple[RecurringPercentage, ...] = ()
    refunds: Tuple[RecurringAmount, ...] = ()
    owners_draw: Tuple[RecurringAmount, ...] = ()
    owners_401k: Tuple[DatedAmount, ...] = ()
    estimated_taxes: Tuple[DatedAmount, ...] = ()

    def collection(self, name: str) -> Tuple[LineItem, ...]:
        if name not in COLLECTION_VARIANTS:
            raise KeyError(f"Unknown collection: {name!r}")
        return getattr(self, name)

    def iter_collections(self) -> Iterator[Tuple[str, Tuple[LineItem, ...]]]:
        for name in COLLECTION_VARIANTS:
            yield name, getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dictionary, the layout saved scenarios carry as `data`."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            key = CAMEL_CASE_FIELDS[f.name]
            if f.name in COLLECTION_VARIANTS:
                out[key] = [item.to_dict() for item in value]
            elif f.name == "forecast_start_date":
                out[key] = format_year_month(value) if value is not None else None
            else:
                out[key] = value
        return out

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        defaults: Optional["AssumptionSet"] = None,
    ) -> "AssumptionSet":
        """
        Inverse of to_dict(). Keys missing from `data` keep the value from `defaults`
        (or the dataclass default). A null money scalar reads back as NaN
        (JSON has no NaN literal). Raises ValueError/TypeError/KeyError on malformed
        values.
        """
        base = defaults if defaults is not None else cls()
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            key = CAMEL_CASE_FIELDS[f.name]
            if key not in data:
                kwargs[f.name] = getattr(base, f.name)
                continue
            raw = data[key]
            if f.name in COLLECTION_VARIANTS:
                variant = COLLECTION_VARIANTS[f.name]
                kwargs[f.name] = tuple(variant.from_dict(d) for d in (raw or []))
            elif f.name == "forecast_start_date":
                kwargs[f.name] = parse_year_month(raw) if raw else None
            elif f.name in ("chart_y_min", "chart_y_max"):
                kwargs[f.name] = None if raw is None else float(raw)
            elif f.name == "number_of_months":
                kwargs[f.name] = int(raw)
            else:
                kwargs[f.name] = math.nan if raw is None else float(raw)
        return cls(**kwargs)
