"""In-process content security repository that notifies change observers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from content_security_audit.application.ports.content_security_event_source_port import (
    ContentSecurityEventSourcePort,
    ContentSecurityHandler,
)
from content_security_audit.domain.content_security import (
    ContentReference,
    ContentSecurityEvent,
    PermissionEntry,
)
from content_security_audit.domain.security_save_type import SecuritySaveType

logger = logging.getLogger(__name__)


class InMemoryContentSecurityRepository(ContentSecurityEventSourcePort):
    """Keep access entries per content item and raise security-saved events.

    Handlers run synchronously on the thread that saves the descriptor, in
    subscription order. A handler error propagates to the saving caller.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: list[ContentSecurityHandler] = []
        self._descriptors: dict[ContentReference, tuple[PermissionEntry, ...]] = {}

    def subscribe(self, handler: ContentSecurityHandler) -> None:
        with self._lock:
            self._handlers.append(handler)

    def unsubscribe(self, handler: ContentSecurityHandler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def get_entries(self, content_link: ContentReference) -> tuple[PermissionEntry, ...]:
        with self._lock:
            return self._descriptors.get(content_link, ())

    def save(
        self,
        *,
        content_link: ContentReference,
        entries: Iterable[PermissionEntry],
        save_type: SecuritySaveType,
    ) -> None:
        """Store entries for content_link and notify subscribed handlers."""

        saved_entries = tuple(entries)
        with self._lock:
            self._descriptors[content_link] = saved_entries
            handlers = list(self._handlers)

        logger.debug(
            "content_security_saved content_link=%s save_type=%s entries=%s handlers=%s",
            content_link,
            save_type.label,
            len(saved_entries),
            len(handlers),
        )
        event = ContentSecurityEvent(
            content_link=content_link,
            save_type=save_type,
            entries=saved_entries,
        )
        for handler in handlers:
            handler(event)
