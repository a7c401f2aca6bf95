"""
Editing-layer checks for an AssumptionSet.

The engine accepts anything well-typed; these checks exist so a form can
point at values that will silently do nothing:
- horizon outside the supported range
- items dated outside the horizon
- severance on an employee with no end month, or off the severance menu
- non-finite scalars
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from core.config import DEFAULT_CONFIG, ProjectionConfig

from .items import DatedAmount, Employee
from .model import AssumptionSet

_SCALARS = (
    "initial_cash",
    "starting_mrr",
    "new_customers_per_month",
    "arpu",
    "monthly_churn_rate",
    "additional_revenue",
    "additional_revenue_growth",
)


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an assumption set."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_assumptions(
    assumptions: AssumptionSet,
    *,
    config: ProjectionConfig = DEFAULT_CONFIG,
) -> ValidationResult:
    """
    Run all editing-layer checks.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()
    n = assumptions.number_of_months

    # --- Horizon ---
    if not (config.min_months <= n <= config.max_months):
        result.errors.append(
            f"Number of months must be between {config.min_months} and "
            f"{config.max_months} (got {n})."
        )

    # --- Scalars ---
    for name in _SCALARS:
        value = getattr(assumptions, name)
        if not math.isfinite(value):
            result.warnings.append(f"{name} is not a finite number ({value}).")

    # --- Line items ---
    for name, items in assumptions.iter_collections():
        for item in items:
            if isinstance(item, DatedAmount) and not (0 <= item.month < n):
                result.warnings.append(
                    f"{name}: '{item.label}' is dated month {item.month}, "
                    f"outside the {n}-month horizon."
                )
            elif isinstance(item, Employee):
                if item.severance_months not in config.severance_choices:
                    result.warnings.append(
                        f"employees: '{item.name}' has {item.severance_months} months of severance, "
                        f"not one of {list(config.severance_choices)}."
                    )
                if item.is_indefinite and item.severance_months:
                    result.warnings.append(
                        f"employees: '{item.name}' has severance but no end month."
                    )
                if not item.is_indefinite and item.end_month < item.start_month:
                    result.warnings.append(
                        f"employees: '{item.name}' ends before starting."
                    )
                if not (0 <= item.start_month < n):
                    result.warnings.append(
                        f"employees: '{item.name}' starts in month {item.start_month}, "
                        f"outside the {n}-month horizon."
                    )

    return result
