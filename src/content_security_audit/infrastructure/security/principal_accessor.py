"""Ambient security principal backed by a context variable."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from content_security_audit.application.ports.principal_accessor_port import (
    PrincipalAccessorPort,
)

ANONYMOUS_PRINCIPAL = "Anonymous"
_current_principal: ContextVar[str | None] = ContextVar("current_principal", default=None)


class ContextVarPrincipalAccessor(PrincipalAccessorPort):
    """Read the principal set for the current thread or task."""

    def __init__(self, *, anonymous_name: str = ANONYMOUS_PRINCIPAL) -> None:
        self._anonymous_name = anonymous_name

    def current_actor_name(self) -> str:
        name = _current_principal.get()
        if name is None or not name.strip():
            return self._anonymous_name
        return name


@contextmanager
def impersonate(name: str) -> Iterator[None]:
    """Run the enclosed block as principal name."""

    token = _current_principal.set(name)
    try:
        yield
    finally:
        _current_principal.reset(token)
