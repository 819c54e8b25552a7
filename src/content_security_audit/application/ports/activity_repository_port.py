"""Port for append-only activity (audit log) records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class PersistenceError(RuntimeError):
    """Raised when an activity could not be written to the store."""


@dataclass(frozen=True)
class ActivityCreateInput:
    """Input payload for inserting an activity record."""

    activity_type: str
    action_code: int
    action_label: str
    data: dict[str, str] = field(default_factory=dict)


class ActivityRepositoryPort(Protocol):
    """Async activity repository contract."""

    async def save(self, payload: ActivityCreateInput) -> int:
        """Append an activity record and return its numeric id."""
