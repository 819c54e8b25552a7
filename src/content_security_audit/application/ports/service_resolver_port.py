"""Port for resolving collaborators from the host's service container."""

from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class DependencyUnavailableError(LookupError):
    """Raised when a required collaborator is not registered or cannot be built."""


class ServiceResolverPort(Protocol):
    """Service lookup contract."""

    def resolve(self, service_type: type[T]) -> T:
        """Return the instance registered for service_type."""
