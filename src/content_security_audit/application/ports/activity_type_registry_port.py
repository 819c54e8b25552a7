"""Port for registering audit activity types."""

from __future__ import annotations

from typing import Protocol

from content_security_audit.domain.activity_type import ActivityType


class RegistrationError(RuntimeError):
    """Raised when an activity type cannot be registered."""


class ActivityTypeRegistryPort(Protocol):
    """Activity type registry contract."""

    def register(self, activity_type: ActivityType) -> None:
        """Add or replace the activity type registered under its name."""
