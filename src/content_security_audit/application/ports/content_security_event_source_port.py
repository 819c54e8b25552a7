"""Port for subscribing to content security change notifications."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from content_security_audit.domain.content_security import ContentSecurityEvent

ContentSecurityHandler = Callable[[ContentSecurityEvent], None]


class UnsubscribeError(RuntimeError):
    """Raised when a change handler could not be detached."""


class ContentSecurityEventSourcePort(Protocol):
    """Narrow observer contract of the content security repository."""

    def subscribe(self, handler: ContentSecurityHandler) -> None:
        """Attach handler to security-saved notifications."""

    def unsubscribe(self, handler: ContentSecurityHandler) -> None:
        """Detach a previously attached handler."""
