"""Process-local activity type registry."""

from __future__ import annotations

import threading

from content_security_audit.application.ports.activity_type_registry_port import (
    ActivityTypeRegistryPort,
)
from content_security_audit.domain.activity_type import ActivityType


class InMemoryActivityTypeRegistry(ActivityTypeRegistryPort):
    """Activity types keyed by name; registering a known name replaces it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._activity_types: dict[str, ActivityType] = {}

    def register(self, activity_type: ActivityType) -> None:
        with self._lock:
            self._activity_types[activity_type.name] = activity_type

    def get(self, name: str) -> ActivityType | None:
        with self._lock:
            return self._activity_types.get(name)

    def list_activity_types(self) -> list[ActivityType]:
        with self._lock:
            return list(self._activity_types.values())
