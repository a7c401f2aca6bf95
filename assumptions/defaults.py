from __future__ import annotations

from core.config import DEFAULT_CONFIG

from .items import DatedAmount, Employee, RecurringAmount, RecurringPercentage
from .model import AssumptionSet


def default_assumptions() -> AssumptionSet:
    """
    Starter set shown to a new user: a small payroll and typical SaaS overhead,
    with revenue drivers zeroed so the user fills in their own numbers.
    """
    return AssumptionSet(
        initial_cash=150000.0,
        starting_mrr=0.0,
        new_customers_per_month=0.0,
        arpu=15.0,
        monthly_churn_rate=5.0,
        additional_revenue=0.0,
        additional_revenue_growth=0.0,
        number_of_months=DEFAULT_CONFIG.default_months,
        employees=(
            Employee(id=1, name="Employee 1", salary=8000.0),
            Employee(id=2, name="Employee 2", salary=7000.0),
        ),
        recurring_expenses=(
            RecurringAmount(id=1, category="Software & Tools", amount=2000.0),
            RecurringAmount(id=2, category="Hosting & Infrastructure", amount=1500.0),
            RecurringAmount(id=3, category="Marketing", amount=1000.0),
        ),
        one_time_expenses=(
            DatedAmount(id=1, description="Equipment", month=3, amount=5000.0),
        ),
        variable_expenses=(
            RecurringPercentage(id=1, category="Stripe Fees", percentage=2.9),
        ),
        refunds=(
            RecurringAmount(id=1, category="Customer Refunds", amount=500.0),
        ),
        owners_draw=(
            RecurringAmount(id=1, category="Owner Draw", amount=0.0),
        ),
        owners_401k=(
            DatedAmount(id=1, description="401k Contribution", month=0, amount=0.0),
        ),
        estimated_taxes=(
            DatedAmount(id=1, description="Q1 Estimated Tax", month=3, amount=0.0),
            DatedAmount(id=2, description="Q2 Estimated Tax", month=5, amount=0.0),
            DatedAmount(id=3, description="Q3 Estimated Tax", month=8, amount=0.0),
            DatedAmount(id=4, description="Q4 Estimated Tax", month=11, amount=0.0),
        ),
    )
