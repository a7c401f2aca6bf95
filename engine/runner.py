"""
Projection runner — the single forward recurrence that turns an AssumptionSet
into the monthly ledger.

Per period m:
  1. Revenue state (m >= 1): churn MRR and customers, add new customers,
     compound additional revenue by its growth rate (negative growth decays,
     no floor).
  2. Category totals from line items (engine.cashflow), each rounded to a
     whole unit on its own.
  3. Inflows/outflows are sums of the rounded categories; the cash balance
     carries forward from initial_cash.

Pure and total: no I/O, no exceptions, non-finite inputs propagate.
"""

from __future__ import annotations

from typing import List

from assumptions.model import AssumptionSet
from core.config import DEFAULT_CONFIG
from core.utils import round_half_up

from .cashflow import dated_total, payroll_total, recurring_total, variable_total
from .period import ProjectionPeriod


def project(assumptions: AssumptionSet) -> List[ProjectionPeriod]:
    """
    Compute exactly `number_of_months` periods (none if it is below 1).

    Parameters
    ----------
    assumptions : AssumptionSet
        Snapshot of the inputs; read only.

    Returns
    -------
    List of ProjectionPeriod, indices 0..number_of_months-1.
    """
    a = assumptions
    churn = a.monthly_churn_rate / 100
    growth = a.additional_revenue_growth / 100
    factor = DEFAULT_CONFIG.loaded_salary_factor

    mrr = a.starting_mrr
    additional = a.additional_revenue
    customers = round_half_up(a.starting_mrr / a.arpu) if a.arpu > 0 else 0.0
    cash = a.initial_cash

    periods: List[ProjectionPeriod] = []
    for m in range(max(a.number_of_months, 0)):
        new_customers = 0.0
        churned_customers = 0.0
        new_revenue = 0.0
        churned_revenue = 0.0

        # --- Revenue state ---
        if m > 0:
            churned_revenue = mrr * churn
            new_revenue = a.new_customers_per_month * a.arpu
            mrr = mrr - churned_revenue + new_revenue

            churned_customers = round_half_up(customers * churn)
            new_customers = a.new_customers_per_month
            customers = customers - churned_customers + new_customers

            additional = additional * (1 + growth)

        # --- Inflows ---
        annual_plan = dated_total(a.annual_plan_revenue, m)
        injections = dated_total(a.capital_injections, m)

        # --- Outflows ---
        revenue_base = mrr + additional + annual_plan  # capital injections excluded
        payroll = payroll_total(a.employees, m, factor)
        recurring = recurring_total(a.recurring_expenses)
        one_time = dated_total(a.one_time_expenses, m)
        variable = variable_total(a.variable_expenses, revenue_base)
        refunds = recurring_total(a.refunds)
        taxes = dated_total(a.estimated_taxes, m)
        draw = recurring_total(a.owners_draw)
        k401 = dated_total(a.owners_401k, m)

        # --- Round per category, then sum ---
        mrr_r = round_half_up(mrr)
        additional_r = round_half_up(additional)
        annual_plan_r = round_half_up(annual_plan)
        injections_r = round_half_up(injections)
        total_inflows = mrr_r + additional_r + annual_plan_r + injections_r

        payroll_r = round_half_up(payroll)
        recurring_r = round_half_up(recurring)
        one_time_r = round_half_up(one_time)
        variable_r = round_half_up(variable)
        refunds_r = round_half_up(refunds)
        taxes_r = round_half_up(taxes)
        draw_r = round_half_up(draw)
        k401_r = round_half_up(k401)
        total_outflows = (
            payroll_r + recurring_r + one_time_r + variable_r
            + refunds_r + taxes_r + draw_r + k401_r
        )

        net = total_inflows - total_outflows
        cash = cash + net

        periods.append(
            ProjectionPeriod(
                month_index=m,
                mrr=mrr_r,
                additional_revenue=additional_r,
                annual_plan_revenue=annual_plan_r,
                capital_injections=injections_r,
                total_inflows=total_inflows,
                payroll=payroll_r,
                recurring_expenses=recurring_r,
                one_time_expenses=one_time_r,
                variable_expenses=variable_r,
                refunds=refunds_r,
                estimated_taxes=taxes_r,
                owners_draw=draw_r,
                owners_401k=k401_r,
                total_outflows=total_outflows,
                net_cashflow=net,
                cash_balance=cash,
                new_customers=new_customers,
                churned_customers=churned_customers,
                total_customers=customers,
                new_revenue_from_growth=round_half_up(new_revenue),
                churned_revenue_amount=round_half_up(churned_revenue),
            )
        )

    return periods
