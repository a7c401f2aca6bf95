"""
Per-category cashflow rules for a single period.

Hidden items never contribute. Items dated outside the horizon are inert
because no period ever matches them. Every helper returns the unrounded
category total; rounding happens once per category in the runner.
"""

from __future__ import annotations

from typing import Iterable

from assumptions.items import DatedAmount, Employee, RecurringAmount, RecurringPercentage
from core.config import DEFAULT_CONFIG


def dated_total(items: Iterable[DatedAmount], month: int) -> float:
    """Sum of visible items dated exactly `month`."""
    return sum((item.amount for item in items if not item.hidden and item.month == month), 0.0)


def recurring_total(items: Iterable[RecurringAmount]) -> float:
    """Sum of visible recurring amounts (identical every period)."""
    return sum((item.amount for item in items if not item.hidden), 0.0)


def variable_total(items: Iterable[RecurringPercentage], revenue_base: float) -> float:
    """Revenue-proportional expenses: Σ percentage/100 × revenue_base."""
    return sum(
        (revenue_base * item.percentage / 100 for item in items if not item.hidden),
        0.0,
    )


def loaded_salary(employee: Employee, factor: float = DEFAULT_CONFIG.loaded_salary_factor) -> float:
    return employee.salary * factor


def on_payroll(employee: Employee, month: int) -> bool:
    """
    True if the employee is paid in `month`:
    started, and either indefinite, still active, or inside severance.
    No partial-month proration.
    """
    if month < employee.start_month:
        return False
    if employee.is_indefinite:
        return True
    if month <= employee.end_month:
        return True
    return month - employee.end_month <= employee.severance_months


def payroll_total(
    employees: Iterable[Employee],
    month: int,
    factor: float = DEFAULT_CONFIG.loaded_salary_factor,
) -> float:
    return sum(
        (loaded_salary(emp, factor) for emp in employees if not emp.hidden and on_payroll(emp, month)),
        0.0,
    )
