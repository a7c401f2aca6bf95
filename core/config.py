"""
Projection configuration.
Fixed model constants shared by the engine, the codec and the editing layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ProjectionConfig:
    # all-in employment cost multiplier applied to base salary
    loaded_salary_factor: float = 1.15

    # horizon bounds (editing layer only, the engine accepts any length)
    default_months: int = 24
    min_months: int = 6
    max_months: int = 60

    severance_choices: Tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6, 9, 12)

    # key the scenario library blob is stored under
    storage_key: str = "cashflow-scenarios"

    # descriptions given to items rebuilt from legacy "index:value" blobs
    legacy_annual_plan_description: str = "Annual Plan Payment"
    legacy_capital_injection_description: str = "Capital Injection"


DEFAULT_CONFIG = ProjectionConfig()
