from __future__ import annotations

from typing import Dict, Tuple

# Short query-string keys for scalar assumptions.
# These are shared with links already in circulation; never rename them.
SCALAR_KEYS: Dict[str, str] = {
    "ic": "initial_cash",
    "mrr": "starting_mrr",
    "nc": "new_customers_per_month",
    "arpu": "arpu",
    "churn": "monthly_churn_rate",
    "ar": "additional_revenue",
    "arg": "additional_revenue_growth",
    "cymin": "chart_y_min",
    "cymax": "chart_y_max",
    "nm": "number_of_months",
    "fsd": "forecast_start_date",
}

# Scalars left out of an encoded state when unset.
OPTIONAL_SCALAR_KEYS: Tuple[str, ...] = ("cymin", "cymax", "fsd")

# At least one of these must be present for a query to count as ours.
PRESENCE_KEYS: Tuple[str, ...] = ("ic", "mrr")

# Short keys for line-item collections, in encode order.
COLLECTION_KEYS: Dict[str, str] = {
    "apr": "annual_plan_revenue",
    "ci": "capital_injections",
    "emp": "employees",
    "rec": "recurring_expenses",
    "one": "one_time_expenses",
    "var": "variable_expenses",
    "ref": "refunds",
    "odr": "owners_draw",
    "o4k": "owners_401k",
    "etx": "estimated_taxes",
}

# Collections that may still arrive in the legacy "index:value" form.
LEGACY_COLLECTION_KEYS: Tuple[str, ...] = ("apr", "ci")

# camelCase names used by saved scenario payloads.
CAMEL_CASE_FIELDS: Dict[str, str] = {
    "initial_cash": "initialCash",
    "starting_mrr": "startingMRR",
    "new_customers_per_month": "newCustomersPerMonth",
    "arpu": "arpu",
    "monthly_churn_rate": "monthlyChurnRate",
    "additional_revenue": "additionalRevenue",
    "additional_revenue_growth": "additionalRevenueGrowth",
    "number_of_months": "numberOfMonths",
    "forecast_start_date": "forecastStartDate",
    "chart_y_min": "chartYMin",
    "chart_y_max": "chartYMax",
    "annual_plan_revenue": "annualPlanRevenue",
    "capital_injections": "capitalInjections",
    "employees": "employees",
    "recurring_expenses": "recurringExpenses",
    "one_time_expenses": "oneTimeExpenses",
    "variable_expenses": "variableExpenses",
    "refunds": "refunds",
    "owners_draw": "ownersDraw",
    "owners_401k": "owners401k",
    "estimated_taxes": "estimatedTaxes",
    "start_month": "startMonth",
    "end_month": "endMonth",
    "severance_months": "severanceMonths",
}
