"""Port for reading the acting principal from the security context."""

from __future__ import annotations

from typing import Protocol


class PrincipalAccessorPort(Protocol):
    """Ambient security context contract."""

    def current_actor_name(self) -> str:
        """Return the name of the current principal; never empty."""
