"""Minimal service container used as the host's dependency resolver."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, TypeVar, cast

from content_security_audit.application.ports.service_resolver_port import (
    DependencyUnavailableError,
    ServiceResolverPort,
)

T = TypeVar("T")


class ServiceContainer(ServiceResolverPort):
    """Map service types to instances or lazily built singletons."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._instances: dict[type[Any], Any] = {}
        self._factories: dict[type[Any], Callable[[], Any]] = {}

    def register_instance(self, service_type: type[T], instance: T) -> None:
        with self._lock:
            self._factories.pop(service_type, None)
            self._instances[service_type] = instance

    def register_factory(self, service_type: type[T], factory: Callable[[], T]) -> None:
        with self._lock:
            self._instances.pop(service_type, None)
            self._factories[service_type] = factory

    def resolve(self, service_type: type[T]) -> T:
        with self._lock:
            if service_type in self._instances:
                return cast(T, self._instances[service_type])

            factory = self._factories.get(service_type)
            if factory is None:
                raise DependencyUnavailableError(
                    f"No service registered for {_type_name(service_type)}"
                )

            try:
                instance = factory()
            except Exception as error:  # noqa: BLE001
                raise DependencyUnavailableError(
                    f"Failed to build service {_type_name(service_type)}: {error}"
                ) from error

            self._instances[service_type] = instance
            return cast(T, instance)


def _type_name(service_type: type[Any]) -> str:
    return getattr(service_type, "__name__", repr(service_type))
