"""
Line-item variants.

Every collection of an AssumptionSet holds one variant:
  DatedAmount          — lands in a single period (one-time expenses, annual plan revenue,
                         capital injections, 401k contributions, estimated taxes)
  RecurringAmount      — same amount every period (recurring expenses, refunds, owner's draw)
  RecurringPercentage  — share of the period's revenue (variable expenses)
  Employee             — loaded salary while employed or in severance

`hidden` items stay in their collection but are skipped by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class DatedAmount:
    id: int
    description: str
    month: int
    amount: float
    hidden: bool = False

    @property
    def label(self) -> str:
        return self.description

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "month": self.month,
            "amount": self.amount,
            "hidden": self.hidden,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DatedAmount":
        # 401k rows were saved with "category" instead of "description"
        label = d.get("description", d.get("category", ""))
        return cls(
            id=int(d["id"]),
            description=str(label or ""),
            month=int(d.get("month") or 0),
            amount=float(d.get("amount") or 0.0),
            hidden=bool(d.get("hidden", False)),
        )


@dataclass(frozen=True)
class RecurringAmount:
    id: int
    category: str
    amount: float
    hidden: bool = False

    @property
    def label(self) -> str:
        return self.category

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "category": self.category, "amount": self.amount, "hidden": self.hidden}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RecurringAmount":
        return cls(
            id=int(d["id"]),
            category=str(d.get("category") or ""),
            amount=float(d.get("amount") or 0.0),
            hidden=bool(d.get("hidden", False)),
        )


@dataclass(frozen=True)
class RecurringPercentage:
    id: int
    category: str
    percentage: float
    hidden: bool = False

    @property
    def label(self) -> str:
        return self.category

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "percentage": self.percentage,
            "hidden": self.hidden,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RecurringPercentage":
        return cls(
            id=int(d["id"]),
            category=str(d.get("category") or ""),
            percentage=float(d.get("percentage") or 0.0),
            hidden=bool(d.get("hidden", False)),
        )


@dataclass(frozen=True)
class Employee:
    """
    Payroll row. `salary` is the monthly base before loading.
    `end_month=None` means employed indefinitely (severance is then meaningless).
    """

    id: int
    name: str
    salary: float
    hidden: bool = False
    start_month: int = 0
    end_month: Optional[int] = None
    severance_months: int = 0

    @property
    def label(self) -> str:
        return self.name

    @property
    def is_indefinite(self) -> bool:
        return self.end_month is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "salary": self.salary,
            "hidden": self.hidden,
            "startMonth": self.start_month,
            "endMonth": self.end_month,
            "severanceMonths": self.severance_months,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Employee":
        end = d.get("endMonth")
        return cls(
            id=int(d["id"]),
            name=str(d.get("name") or ""),
            salary=float(d.get("salary") or 0.0),
            hidden=bool(d.get("hidden", False)),
            start_month=int(d.get("startMonth") or 0),
            end_month=None if end is None else int(end),
            severance_months=int(d.get("severanceMonths") or 0),
        )


LineItem = Union[DatedAmount, RecurringAmount, RecurringPercentage, Employee]
