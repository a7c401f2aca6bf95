from __future__ import annotations

import math
from dataclasses import replace

import pytest
from hypothesis import given, settings, strategies as st

from assumptions.items import DatedAmount, Employee, RecurringAmount, RecurringPercentage
from assumptions.model import AssumptionSet
from engine.cashflow import on_payroll, payroll_total
from engine.runner import project


def test_concrete_scenario_first_two_periods(concrete_scenario: AssumptionSet) -> None:
    periods = project(concrete_scenario)

    p0, p1 = periods[0], periods[1]
    assert p0.mrr == 63000
    assert p0.total_inflows == 63000
    assert p0.total_outflows == 0
    assert p0.cash_balance == 213000
    assert p0.total_customers == 4200
    assert p0.new_customers == 0
    assert p0.churned_revenue_amount == 0

    assert p1.churned_revenue_amount == 3150
    assert p1.new_revenue_from_growth == 750
    assert p1.mrr == 60600
    assert p1.cash_balance == 273600
    assert p1.churned_customers == 210
    assert p1.total_customers == 4200 - 210 + 50


def test_length_matches_number_of_months(concrete_scenario: AssumptionSet) -> None:
    assert len(project(concrete_scenario)) == 24
    assert [p.month_index for p in project(concrete_scenario)] == list(range(24))


@pytest.mark.parametrize("n", [0, -3])
def test_non_positive_horizon_gives_empty_ledger(concrete_scenario: AssumptionSet, n: int) -> None:
    assert project(replace(concrete_scenario, number_of_months=n)) == []


@settings(max_examples=25, deadline=None)
@given(n=st.integers(min_value=0, max_value=1000))
def test_period_count_matches_horizon_unclamped(n: int) -> None:
    a = AssumptionSet(
        initial_cash=1000.0,
        starting_mrr=500.0,
        arpu=10.0,
        number_of_months=n,
        recurring_expenses=(RecurringAmount(id=1, category="Rent", amount=100.0),),
    )
    assert len(project(a)) == n


def test_employee_severance_boundary() -> None:
    emp = Employee(id=1, name="Ada", salary=10000.0, start_month=0, end_month=5, severance_months=2)
    a = AssumptionSet(number_of_months=12, employees=(emp,))
    payroll = [p.payroll for p in project(a)]

    assert payroll[:8] == [11500] * 8
    assert payroll[8:] == [0] * 4


def test_employee_start_month_and_indefinite() -> None:
    emp = Employee(id=1, name="Late", salary=1000.0, start_month=3)
    assert emp.is_indefinite
    assert not on_payroll(emp, 2)
    assert on_payroll(emp, 3)
    assert on_payroll(emp, 500)


def test_end_month_without_severance_stops_next_period() -> None:
    emp = Employee(id=1, name="Bo", salary=1000.0, end_month=2)
    assert not emp.is_indefinite
    assert on_payroll(emp, 2)
    assert not on_payroll(emp, 3)


def test_hidden_employee_excluded_from_payroll() -> None:
    emps = [
        Employee(id=1, name="A", salary=1000.0),
        Employee(id=2, name="B", salary=2000.0, hidden=True),
    ]
    assert payroll_total(emps, 0) == pytest.approx(1150.0)


def test_variable_expense_base_excludes_capital_injections() -> None:
    a = AssumptionSet(
        starting_mrr=10000.0,
        number_of_months=3,
        annual_plan_revenue=(DatedAmount(id=1, description="Annual", month=1, amount=5000.0),),
        capital_injections=(DatedAmount(id=1, description="Seed", month=1, amount=1_000_000.0),),
        variable_expenses=(RecurringPercentage(id=1, category="Fees", percentage=10.0),),
    )
    periods = project(a)
    assert periods[0].variable_expenses == 1000
    assert periods[1].variable_expenses == 1500
    assert periods[1].total_inflows == 10000 + 5000 + 1_000_000


def test_additional_revenue_decays_without_floor() -> None:
    a = AssumptionSet(additional_revenue=1000.0, additional_revenue_growth=-150.0, number_of_months=3)
    periods = project(a)
    assert [p.additional_revenue for p in periods] == [1000, -500, 250]


def test_additional_revenue_compounds() -> None:
    a = AssumptionSet(additional_revenue=1000.0, additional_revenue_growth=10.0, number_of_months=3)
    assert [p.additional_revenue for p in project(a)] == [1000, 1100, 1210]


def test_out_of_range_items_are_inert() -> None:
    base = AssumptionSet(initial_cash=100.0, number_of_months=6)
    with_items = replace(
        base,
        one_time_expenses=(
            DatedAmount(id=1, description="Past", month=-1, amount=999.0),
            DatedAmount(id=2, description="Future", month=6, amount=999.0),
        ),
        employees=(Employee(id=1, name="Later", salary=5000.0, start_month=6),),
    )
    assert project(with_items) == project(base)


def test_zero_arpu_means_zero_customers() -> None:
    a = AssumptionSet(starting_mrr=5000.0, arpu=0.0, number_of_months=2)
    assert project(a)[0].total_customers == 0


def test_categories_are_rounded_before_summing() -> None:
    a = AssumptionSet(
        number_of_months=1,
        recurring_expenses=(RecurringAmount(id=1, category="A", amount=0.4),),
        refunds=(RecurringAmount(id=1, category="B", amount=0.4),),
    )
    p = project(a)[0]
    assert p.recurring_expenses == 0
    assert p.refunds == 0
    assert p.total_outflows == 0


def test_non_finite_inputs_propagate_without_raising() -> None:
    a = AssumptionSet(initial_cash=math.nan, starting_mrr=math.inf, arpu=10.0, number_of_months=3)
    periods = project(a)
    assert len(periods) == 3
    assert math.isnan(periods[0].cash_balance)
    assert math.isinf(periods[0].mrr)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_money = st.floats(min_value=-1e7, max_value=1e7, allow_nan=False, allow_infinity=False)
_month = st.integers(min_value=-3, max_value=40)
_amount = st.integers(min_value=-1_000_000, max_value=1_000_000).map(float)


@st.composite
def assumption_sets(draw) -> AssumptionSet:
    dated = st.builds(DatedAmount, id=st.just(0), description=st.just("x"), month=_month, amount=_amount)
    recurring = st.builds(RecurringAmount, id=st.just(0), category=st.just("x"), amount=_amount)
    pct = st.builds(
        RecurringPercentage,
        id=st.just(0),
        category=st.just("x"),
        percentage=st.floats(min_value=0, max_value=50),
        hidden=st.booleans(),
    )
    emp = st.builds(
        Employee,
        id=st.just(0),
        name=st.just("x"),
        salary=_amount,
        start_month=_month,
        end_month=st.one_of(st.none(), _month),
        severance_months=st.integers(min_value=0, max_value=12),
    )
    return AssumptionSet(
        initial_cash=draw(_money),
        starting_mrr=draw(_money),
        new_customers_per_month=draw(st.floats(min_value=0, max_value=500)),
        arpu=draw(st.one_of(st.just(0.0), st.floats(min_value=1, max_value=500))),
        monthly_churn_rate=draw(st.floats(min_value=0, max_value=100)),
        additional_revenue=draw(_money),
        additional_revenue_growth=draw(st.floats(min_value=-50, max_value=50)),
        number_of_months=draw(st.integers(min_value=0, max_value=36)),
        annual_plan_revenue=tuple(draw(st.lists(dated, max_size=3))),
        one_time_expenses=tuple(draw(st.lists(dated, max_size=3))),
        recurring_expenses=tuple(draw(st.lists(recurring, max_size=3))),
        variable_expenses=tuple(draw(st.lists(pct, max_size=2))),
        employees=tuple(draw(st.lists(emp, max_size=3))),
    )


@settings(max_examples=60, deadline=None)
@given(a=assumption_sets())
def test_projection_is_deterministic(a: AssumptionSet) -> None:
    assert project(a) == project(a)


@settings(max_examples=60, deadline=None)
@given(a=assumption_sets())
def test_cash_balance_recurrence(a: AssumptionSet) -> None:
    periods = project(a)
    previous = a.initial_cash
    for p in periods:
        assert p.cash_balance == previous + p.net_cashflow
        assert p.net_cashflow == p.total_inflows - p.total_outflows
        previous = p.cash_balance


_whole = st.integers(min_value=0, max_value=100_000).map(float)


@settings(max_examples=60, deadline=None)
@given(
    a=assumption_sets(),
    amount=_whole,
    month=_month,
    collection=st.sampled_from(["one_time_expenses", "estimated_taxes", "owners_401k"]),
)
def test_hiding_a_dated_item_removes_exactly_its_contribution(
    a: AssumptionSet, amount: float, month: int, collection: str
) -> None:
    item = DatedAmount(id=99, description="what-if", month=month, amount=amount)
    visible = replace(a, **{collection: getattr(a, collection) + (item,)})
    hidden = replace(a, **{collection: getattr(a, collection) + (replace(item, hidden=True),)})

    shown, without = project(visible), project(hidden)
    for p_shown, p_without in zip(shown, without):
        expected = amount if p_shown.month_index == month else 0.0
        assert p_without.total_outflows - p_shown.total_outflows == -expected
        assert p_without.total_inflows == p_shown.total_inflows


@settings(max_examples=60, deadline=None)
@given(a=assumption_sets(), amount=_whole)
def test_hiding_a_recurring_item_shifts_every_period(a: AssumptionSet, amount: float) -> None:
    item = RecurringAmount(id=99, category="what-if", amount=amount)
    visible = replace(a, owners_draw=(item,))
    hidden = replace(a, owners_draw=(replace(item, hidden=True),))

    for k, (p_shown, p_without) in enumerate(zip(project(visible), project(hidden))):
        assert p_shown.owners_draw == amount
        assert p_without.owners_draw == 0
        assert p_without.cash_balance - p_shown.cash_balance == pytest.approx(amount * (k + 1))


@settings(max_examples=60, deadline=None)
@given(
    a=assumption_sets(),
    amount=_whole,
    month=_month,
    collection=st.sampled_from(["annual_plan_revenue", "capital_injections"]),
)
def test_hiding_a_dated_inflow_removes_exactly_its_contribution(
    a: AssumptionSet, amount: float, month: int, collection: str
) -> None:
    item = DatedAmount(id=99, description="what-if", month=month, amount=amount)
    visible = replace(a, **{collection: getattr(a, collection) + (item,)})
    hidden = replace(a, **{collection: getattr(a, collection) + (replace(item, hidden=True),)})

    for p_shown, p_without in zip(project(visible), project(hidden)):
        expected = amount if p_shown.month_index == month else 0.0
        assert p_shown.total_inflows - p_without.total_inflows == expected
        assert p_shown.mrr == p_without.mrr
        # annual plans feed the variable-expense base, injections do not
        variable_shift = p_shown.variable_expenses - p_without.variable_expenses
        if collection == "capital_injections" or expected == 0:
            assert variable_shift == 0
        assert p_shown.total_outflows - p_without.total_outflows == variable_shift


@settings(max_examples=60, deadline=None)
@given(a=assumption_sets(), percentage=st.floats(min_value=0, max_value=50))
def test_hiding_a_variable_expense_removes_exactly_its_share(a: AssumptionSet, percentage: float) -> None:
    item = RecurringPercentage(id=99, category="what-if", percentage=percentage)
    shown = project(replace(a, variable_expenses=(item,)))
    without = project(replace(a, variable_expenses=(replace(item, hidden=True),)))

    for p_shown, p_without in zip(shown, without):
        assert p_without.variable_expenses == 0
        assert p_shown.total_inflows == p_without.total_inflows
        assert p_shown.total_outflows - p_without.total_outflows == p_shown.variable_expenses
        base = p_shown.mrr + p_shown.additional_revenue + p_shown.annual_plan_revenue
        assert p_shown.variable_expenses == pytest.approx(base * percentage / 100, abs=2.0)


@settings(max_examples=60, deadline=None)
@given(
    salary=st.integers(min_value=0, max_value=50_000).map(lambda s: float(s * 20)),
    start=_month,
    end=st.one_of(st.none(), _month),
    severance=st.integers(min_value=0, max_value=12),
)
def test_hiding_an_employee_removes_exactly_their_payroll(
    salary: float, start: int, end, severance: int
) -> None:
    emp = Employee(id=1, name="x", salary=salary, start_month=start, end_month=end, severance_months=severance)
    base = AssumptionSet(number_of_months=24)
    shown = project(replace(base, employees=(emp,)))
    without = project(replace(base, employees=(replace(emp, hidden=True),)))

    for p_shown, p_without in zip(shown, without):
        expected = round(salary * 1.15) if on_payroll(emp, p_shown.month_index) else 0
        assert p_shown.payroll - p_without.payroll == expected
        assert p_without.payroll == 0
