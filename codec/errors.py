from __future__ import annotations

from typing import Optional


class DecodeFailure(ValueError):
    """Serialized state could not be parsed. Callers discard it and use defaults."""

    def __init__(self, message: str, *, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
