"""
Compact wire models for line items.

Each collection is encoded as a JSON array of small objects with one- or
two-letter field names (``{"d": ..., "m": ..., "a": ..., "h": 0}``). Pydantic
does the boundary coercion; `hidden` travels as 0/1 and accepts any truthy
value on the way in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from assumptions.items import DatedAmount, Employee, LineItem, RecurringAmount, RecurringPercentage
from core.schema import COLLECTION_KEYS
from core.utils import compact_number


class WireItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # subclasses declare `hidden` last so it serializes after the payload fields
    @field_validator("hidden", mode="before", check_fields=False)
    @classmethod
    def _truthy(cls, v: Any) -> bool:
        return bool(v)

    @field_serializer("hidden", check_fields=False)
    def _as_flag(self, v: bool) -> int:
        return 1 if v else 0

    def to_item(self, item_id: int) -> LineItem:
        raise NotImplementedError

    @classmethod
    def from_item(cls, item: LineItem) -> "WireItem":
        raise NotImplementedError


class DatedAmountWire(WireItem):
    description: Optional[str] = Field(default=None, alias="d")
    month: int = Field(default=0, alias="m")
    amount: float = Field(default=0.0, alias="a")
    hidden: bool = Field(default=False, alias="h")

    @field_serializer("amount")
    def _compact(self, v: float) -> Union[int, float]:
        return compact_number(v)

    def to_item(self, item_id: int) -> DatedAmount:
        return DatedAmount(
            id=item_id,
            description=self.description or "",
            month=self.month,
            amount=self.amount,
            hidden=self.hidden,
        )

    @classmethod
    def from_item(cls, item: DatedAmount) -> "DatedAmountWire":
        return cls(description=item.description, month=item.month, amount=item.amount, hidden=item.hidden)


class CategorizedDatedAmountWire(DatedAmountWire):
    """401k rows: label written under "c"; older saves may carry "d"."""

    description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("c", "d"),
        serialization_alias="c",
    )


class RecurringAmountWire(WireItem):
    category: Optional[str] = Field(default=None, alias="c")
    amount: float = Field(default=0.0, alias="a")
    hidden: bool = Field(default=False, alias="h")

    @field_serializer("amount")
    def _compact(self, v: float) -> Union[int, float]:
        return compact_number(v)

    def to_item(self, item_id: int) -> RecurringAmount:
        return RecurringAmount(id=item_id, category=self.category or "", amount=self.amount, hidden=self.hidden)

    @classmethod
    def from_item(cls, item: RecurringAmount) -> "RecurringAmountWire":
        return cls(category=item.category, amount=item.amount, hidden=item.hidden)


class RecurringPercentageWire(WireItem):
    category: Optional[str] = Field(default=None, alias="c")
    percentage: float = Field(default=0.0, alias="p")
    hidden: bool = Field(default=False, alias="h")

    @field_serializer("percentage")
    def _compact(self, v: float) -> Union[int, float]:
        return compact_number(v)

    def to_item(self, item_id: int) -> RecurringPercentage:
        return RecurringPercentage(
            id=item_id, category=self.category or "", percentage=self.percentage, hidden=self.hidden
        )

    @classmethod
    def from_item(cls, item: RecurringPercentage) -> "RecurringPercentageWire":
        return cls(category=item.category, percentage=item.percentage, hidden=item.hidden)


class EmployeeWire(WireItem):
    name: Optional[str] = Field(default=None, alias="n")
    salary: float = Field(default=0.0, alias="s")
    hidden: bool = Field(default=False, alias="h")
    start_month: Optional[int] = Field(default=0, alias="sm")
    end_month: Optional[int] = Field(default=None, alias="em")
    severance_months: Optional[int] = Field(default=0, alias="sv")

    @field_serializer("salary")
    def _compact(self, v: float) -> Union[int, float]:
        return compact_number(v)

    def to_item(self, item_id: int) -> Employee:
        return Employee(
            id=item_id,
            name=self.name or "",
            salary=self.salary,
            hidden=self.hidden,
            start_month=self.start_month or 0,
            end_month=self.end_month,
            severance_months=self.severance_months or 0,
        )

    @classmethod
    def from_item(cls, item: Employee) -> "EmployeeWire":
        return cls(
            name=item.name,
            salary=item.salary,
            hidden=item.hidden,
            start_month=item.start_month,
            end_month=item.end_month,
            severance_months=item.severance_months,
        )


@dataclass(frozen=True)
class CollectionCodec:
    """How one collection travels: its short key, attribute and wire model."""
    key: str
    attr: str
    wire: Type[WireItem]

    def dump(self, items) -> List[Dict[str, Any]]:
        return [self.wire.from_item(item).model_dump(by_alias=True) for item in items]

    def load(self, rows: List[Any]) -> tuple:
        return tuple(self.wire.model_validate(row).to_item(i + 1) for i, row in enumerate(rows))


_WIRE_BY_KEY: Dict[str, Type[WireItem]] = {
    "apr": DatedAmountWire,
    "ci": DatedAmountWire,
    "emp": EmployeeWire,
    "rec": RecurringAmountWire,
    "one": DatedAmountWire,
    "var": RecurringPercentageWire,
    "ref": RecurringAmountWire,
    "odr": RecurringAmountWire,
    "o4k": CategorizedDatedAmountWire,
    "etx": DatedAmountWire,
}

COLLECTION_CODECS: List[CollectionCodec] = [
    CollectionCodec(key=key, attr=attr, wire=_WIRE_BY_KEY[key]) for key, attr in COLLECTION_KEYS.items()
]
