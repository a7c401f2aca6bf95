"""
Editing operations on immutable AssumptionSets.

Each operation returns a new AssumptionSet; the input is never touched.
Id assignment is owned by the editing session through IdAllocator.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Any, Dict, Optional

from .items import Employee, LineItem
from .model import COLLECTION_VARIANTS, AssumptionSet


class IdAllocator:
    """Monotonic id source for one editing session."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    @classmethod
    def for_assumptions(cls, assumptions: AssumptionSet) -> "IdAllocator":
        """Start above every id already present in `assumptions`."""
        highest = max(
            (item.id for _, items in assumptions.iter_collections() for item in items),
            default=0,
        )
        return cls(start=highest + 1)

    def next_id(self) -> int:
        return next(self._counter)


def _index_of(items, item_id: int) -> int:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    raise KeyError(f"No item with id {item_id}")


def _replace_at(assumptions: AssumptionSet, collection: str, index: int, item: LineItem) -> AssumptionSet:
    items = list(assumptions.collection(collection))
    items[index] = item
    return replace(assumptions, **{collection: tuple(items)})


def add_item(
    assumptions: AssumptionSet,
    collection: str,
    item: LineItem,
    *,
    ids: IdAllocator,
) -> AssumptionSet:
    """Append `item` with a fresh id. New items always start visible."""
    variant = COLLECTION_VARIANTS.get(collection)
    if variant is None:
        raise KeyError(f"Unknown collection: {collection!r}")
    if not isinstance(item, variant):
        raise TypeError(f"{collection} holds {variant.__name__}, got {type(item).__name__}")
    new_item = replace(item, id=ids.next_id(), hidden=False)
    return replace(assumptions, **{collection: assumptions.collection(collection) + (new_item,)})


def remove_item(assumptions: AssumptionSet, collection: str, item_id: int) -> AssumptionSet:
    items = assumptions.collection(collection)
    _index_of(items, item_id)
    return replace(assumptions, **{collection: tuple(i for i in items if i.id != item_id)})


def update_item(
    assumptions: AssumptionSet,
    collection: str,
    item_id: int,
    **changes: Any,
) -> AssumptionSet:
    """
    Change fields of one item. `id` cannot be changed.
    Setting an employee's end_month to None (indefinite) also clears severance.
    """
    if "id" in changes:
        raise ValueError("Item ids are fixed at creation.")
    items = assumptions.collection(collection)
    idx = _index_of(items, item_id)
    item = items[idx]
    if isinstance(item, Employee) and "end_month" in changes and changes["end_month"] is None:
        changes["severance_months"] = 0
    return _replace_at(assumptions, collection, idx, replace(item, **changes))


def toggle_hidden(assumptions: AssumptionSet, collection: str, item_id: int) -> AssumptionSet:
    items = assumptions.collection(collection)
    idx = _index_of(items, item_id)
    item = items[idx]
    return _replace_at(assumptions, collection, idx, replace(item, hidden=not item.hidden))


def unhide_all(assumptions: AssumptionSet) -> AssumptionSet:
    changes = {
        name: tuple(replace(item, hidden=False) if item.hidden else item for item in items)
        for name, items in assumptions.iter_collections()
    }
    return replace(assumptions, **changes)


def hidden_counts(assumptions: AssumptionSet) -> Dict[str, int]:
    return {
        name: sum(1 for item in items if item.hidden)
        for name, items in assumptions.iter_collections()
    }


def set_scalars(assumptions: AssumptionSet, **changes: Optional[Any]) -> AssumptionSet:
    """Change scalar assumptions (initial_cash, arpu, number_of_months, ...)."""
    bad = [k for k in changes if k in COLLECTION_VARIANTS]
    if bad:
        raise ValueError(f"Use the item operations to change collections: {bad}")
    return replace(assumptions, **changes)
