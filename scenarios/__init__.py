"""
Saved scenarios — named snapshots of an AssumptionSet kept in a key-value blob.
"""

from .store import ScenarioDataError, ScenarioLibrary, ScenarioNotFound, ScenarioRecord

__all__ = ["ScenarioDataError", "ScenarioLibrary", "ScenarioNotFound", "ScenarioRecord"]
