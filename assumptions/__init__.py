"""
Assumption model — line-item variants, the AssumptionSet, its default factory,
editing operations and editing-layer checks.
"""

from .items import DatedAmount, Employee, LineItem, RecurringAmount, RecurringPercentage
from .model import COLLECTION_VARIANTS, AssumptionSet
from .defaults import default_assumptions
from .editing import (
    IdAllocator,
    add_item,
    hidden_counts,
    remove_item,
    set_scalars,
    toggle_hidden,
    unhide_all,
    update_item,
)
from .validators import ValidationResult, validate_assumptions

__all__ = [
    "DatedAmount",
    "Employee",
    "LineItem",
    "RecurringAmount",
    "RecurringPercentage",
    "COLLECTION_VARIANTS",
    "AssumptionSet",
    "default_assumptions",
    "IdAllocator",
    "add_item",
    "hidden_counts",
    "remove_item",
    "set_scalars",
    "toggle_hidden",
    "unhide_all",
    "update_item",
    "ValidationResult",
    "validate_assumptions",
]
