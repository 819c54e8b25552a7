"""Rendering of content security events into audit log messages."""

from __future__ import annotations

from collections.abc import Iterable

from content_security_audit.application.ports.principal_accessor_port import (
    PrincipalAccessorPort,
)
from content_security_audit.domain.content_security import (
    ContentSecurityEvent,
    PermissionEntry,
)


def describe_permission_change(entry: PermissionEntry) -> str:
    """Render one access entry as a sentence."""

    return (
        f"{_text(entry.entity_type)}: {_text(entry.name)} "
        f"access level set to: {_text(entry.access)}."
    )


def describe_permission_changes(entries: Iterable[PermissionEntry] | None) -> str:
    """Render all entries space-separated, keeping their original order."""

    if not entries:
        return ""
    return " ".join(
        describe_permission_change(entry) for entry in entries if entry is not None
    )


def format_change_message(event: ContentSecurityEvent, *, actor_name: str) -> str:
    """Build the audit message for event attributed to actor_name."""

    return (
        f"Access rights changed by '{actor_name}' to content id "
        f"{_text(event.content_link)}, save type: {_text(event.save_type)}. "
        f"Following changes were made: {describe_permission_changes(event.entries)}"
    )


class ContentSecurityChangeFormatter:
    """Format events using the principal from the ambient security context."""

    def __init__(self, *, principal_accessor: PrincipalAccessorPort) -> None:
        self._principal_accessor = principal_accessor

    def format(self, event: ContentSecurityEvent) -> str:
        """Return the audit message for event.

        The event's own ``creator`` is always empty, so the actor is read from
        the security context at format time instead.
        """

        return format_change_message(
            event,
            actor_name=self._principal_accessor.current_actor_name(),
        )


def _text(value: object) -> str:
    if value is None:
        return ""
    label = getattr(value, "label", None)
    if isinstance(label, str):
        return label
    return str(value)
