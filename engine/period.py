"""
ProjectionPeriod — one computed month of the ledger.

All money fields are whole currency units (each category rounded on its own
before being summed). Textual month labels are a presentation concern; a
period only knows its index.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ProjectionPeriod:
    month_index: int

    # compounding revenue state
    mrr: float
    additional_revenue: float

    # inflows
    annual_plan_revenue: float
    capital_injections: float
    total_inflows: float

    # outflows
    payroll: float
    recurring_expenses: float
    one_time_expenses: float
    variable_expenses: float
    refunds: float
    estimated_taxes: float
    owners_draw: float
    owners_401k: float
    total_outflows: float

    net_cashflow: float
    cash_balance: float

    # customer / MRR decomposition (zero movement in period 0)
    new_customers: float
    churned_customers: float
    total_customers: float
    new_revenue_from_growth: float
    churned_revenue_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
