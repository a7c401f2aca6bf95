"""Shared fixtures. Sits at the repo root so the flat packages import without installing."""

from __future__ import annotations

import pytest

from assumptions.defaults import default_assumptions
from assumptions.model import AssumptionSet


@pytest.fixture
def concrete_scenario() -> AssumptionSet:
    """Revenue-only scenario with hand-checked figures."""
    return AssumptionSet(
        initial_cash=150000.0,
        starting_mrr=63000.0,
        arpu=15.0,
        new_customers_per_month=50.0,
        monthly_churn_rate=5.0,
        number_of_months=24,
    )


@pytest.fixture
def defaults() -> AssumptionSet:
    return default_assumptions()
