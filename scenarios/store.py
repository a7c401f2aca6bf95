"""
Named scenario library.

A library is an ordered list of ScenarioRecord, keyed by exact (case-sensitive)
name. Saving under an existing name overwrites that record in place; a new
name is appended. The whole library round-trips through one JSON blob, which
the host keeps in whatever key-value store it has (under
DEFAULT_CONFIG.storage_key).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from assumptions.model import AssumptionSet
from core.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class ScenarioNotFound(KeyError):
    pass


class ScenarioDataError(ValueError):
    """A saved record whose `data` no longer reads as an AssumptionSet."""

    def __init__(self, name: str, message: str):
        super().__init__(f"Scenario {name!r}: {message}")
        self.name = name


class ScenarioRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    saved_at: datetime = Field(alias="savedAt")
    note: Optional[str] = None
    data: Dict[str, Any]

    @classmethod
    def capture(
        cls,
        name: str,
        assumptions: AssumptionSet,
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "ScenarioRecord":
        return cls(
            name=name,
            saved_at=now or datetime.now(timezone.utc),
            note=note,
            data=assumptions.to_dict(),
        )

    def assumptions(self, defaults: Optional[AssumptionSet] = None) -> AssumptionSet:
        """Saved data overlaid on `defaults`, so keys added since the save get filled in."""
        try:
            return AssumptionSet.from_dict(self.data, defaults)
        except (ValueError, TypeError, KeyError) as exc:
            raise ScenarioDataError(self.name, f"{type(exc).__name__}: {exc}") from exc

    def to_json_dict(self) -> Dict[str, Any]:
        out = self.model_dump(mode="json", by_alias=True)
        # pydantic writes NaN/inf as null; keep them for json.dumps
        out["data"] = self.data
        if self.note is None:
            out.pop("note")
        return out


_RECORDS = TypeAdapter(List[ScenarioRecord])


class ScenarioLibrary:
    def __init__(self, records: Optional[List[ScenarioRecord]] = None):
        self._records: List[ScenarioRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __contains__(self, name: str) -> bool:
        return self._find(name) is not None

    def names(self) -> List[str]:
        return [r.name for r in self._records]

    def _find(self, name: str) -> Optional[int]:
        for i, r in enumerate(self._records):
            if r.name == name:
                return i
        return None

    def get(self, name: str) -> ScenarioRecord:
        idx = self._find(name)
        if idx is None:
            raise ScenarioNotFound(name)
        return self._records[idx]

    def save(
        self,
        name: str,
        assumptions: AssumptionSet,
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ScenarioRecord:
        """Store under `name` (surrounding whitespace stripped). Blank names are rejected."""
        name = name.strip()
        if not name:
            raise ValueError("Scenario name must not be blank.")
        record = ScenarioRecord.capture(name, assumptions, note=note, now=now)
        idx = self._find(name)
        if idx is None:
            self._records.append(record)
            logger.info("Saved new scenario %r", name)
        else:
            self._records[idx] = record
            logger.info("Overwrote scenario %r", name)
        return record

    def update(
        self,
        name: str,
        assumptions: AssumptionSet,
        *,
        now: Optional[datetime] = None,
    ) -> ScenarioRecord:
        """Re-save an existing scenario, keeping its note."""
        existing = self.get(name)
        return self.save(name, assumptions, note=existing.note, now=now)

    def delete(self, name: str) -> None:
        idx = self._find(name)
        if idx is None:
            raise ScenarioNotFound(name)
        del self._records[idx]
        logger.info("Deleted scenario %r", name)

    def dumps(self) -> str:
        return json.dumps([r.to_json_dict() for r in self._records])

    @classmethod
    def loads(cls, blob: Optional[str]) -> "ScenarioLibrary":
        """Parse a stored blob. A missing or unreadable blob gives an empty library."""
        if not blob:
            return cls()
        try:
            return cls(_RECORDS.validate_python(json.loads(blob)))
        except (ValueError, ValidationError) as exc:
            logger.warning("Failed to load scenarios, starting empty: %s", exc)
            return cls()

    @classmethod
    def load_from(cls, store: Mapping[str, str], key: str = DEFAULT_CONFIG.storage_key) -> "ScenarioLibrary":
        return cls.loads(store.get(key))

    def save_to(self, store: MutableMapping[str, str], key: str = DEFAULT_CONFIG.storage_key) -> None:
        store[key] = self.dumps()
