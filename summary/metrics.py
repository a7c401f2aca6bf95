"""
Headline metrics — the numbers shown above the chart.

  Terminal MRR:     where MRR settles once churn equals new revenue
  Month 12 balance: cash at period index 11
  Burn rate:        outflows minus inflows in the first period
  Cash-out month:   first period with a negative balance
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from assumptions.editing import hidden_counts
from assumptions.model import AssumptionSet
from engine.period import ProjectionPeriod


def terminal_mrr(assumptions: AssumptionSet) -> float:
    """
    Steady-state MRR: new_customers / churn × arpu.
    Unbounded (math.inf) when churn is not positive.
    """
    churn = assumptions.monthly_churn_rate
    if not churn > 0:
        return math.inf
    return assumptions.new_customers_per_month / (churn / 100) * assumptions.arpu


@dataclass
class ProjectionSummary:
    """Structured headline output."""
    starting_cash: float
    month_12_balance: Optional[float]
    final_balance: Optional[float]
    monthly_burn: Optional[float]

    lowest_balance: Optional[float]
    lowest_balance_month: Optional[int]
    cash_out_month: Optional[int]  # first index with a negative balance

    terminal_mrr: float
    hidden_items: int

    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""

        def money(v: Optional[float]) -> str:
            if v is None:
                return "N/A"
            if math.isinf(v):
                return "∞"
            return f"${v:,.0f}"

        rows = [
            {"Metric": "Starting Cash", "Value": money(self.starting_cash), "Unit": ""},
            {"Metric": "Month 12 Balance", "Value": money(self.month_12_balance), "Unit": ""},
            {"Metric": "Final Balance", "Value": money(self.final_balance), "Unit": ""},
            {"Metric": "Monthly Burn Rate", "Value": money(self.monthly_burn), "Unit": "/mo"},
            {"Metric": "Lowest Balance", "Value": money(self.lowest_balance), "Unit": ""},
            {
                "Metric": "Cash-Out Month",
                "Value": "never" if self.cash_out_month is None else str(self.cash_out_month),
                "Unit": "index",
            },
            {"Metric": "Terminal MRR", "Value": money(self.terminal_mrr), "Unit": "/mo"},
            {"Metric": "Hidden Items", "Value": str(self.hidden_items), "Unit": ""},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def summarize(assumptions: AssumptionSet, periods: Sequence[ProjectionPeriod]) -> ProjectionSummary:
    """
    Summarize a projection of `assumptions`.

    `periods` must be the output of engine.project(assumptions); an empty
    projection yields None for every period-derived figure.
    """
    hidden = sum(hidden_counts(assumptions).values())
    tmrr = terminal_mrr(assumptions)

    if not periods:
        return ProjectionSummary(
            starting_cash=assumptions.initial_cash,
            month_12_balance=None,
            final_balance=None,
            monthly_burn=None,
            lowest_balance=None,
            lowest_balance_month=None,
            cash_out_month=None,
            terminal_mrr=tmrr,
            hidden_items=hidden,
            flags=[f"HIDDEN_ITEMS: {hidden} item(s) excluded"] if hidden else [],
        )

    lowest = min(periods, key=lambda p: p.cash_balance)
    cash_out = next((p.month_index for p in periods if p.cash_balance < 0), None)
    last = periods[-1]

    flags = []
    if cash_out is not None:
        flags.append(f"CASH_OUT: balance goes negative in month {cash_out}")
    if last.net_cashflow < 0:
        flags.append("NEGATIVE_NET_AT_END: still burning cash in the final month")
    if hidden:
        flags.append(f"HIDDEN_ITEMS: {hidden} item(s) excluded")

    return ProjectionSummary(
        starting_cash=assumptions.initial_cash,
        month_12_balance=periods[11].cash_balance if len(periods) > 11 else None,
        final_balance=last.cash_balance,
        monthly_burn=periods[0].total_outflows - periods[0].total_inflows,
        lowest_balance=lowest.cash_balance,
        lowest_balance_month=lowest.month_index,
        cash_out_month=cash_out,
        terminal_mrr=tmrr,
        hidden_items=hidden,
        flags=flags,
    )
