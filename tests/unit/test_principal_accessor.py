from __future__ import annotations

from content_security_audit.infrastructure.security.principal_accessor import (
    ANONYMOUS_PRINCIPAL,
    ContextVarPrincipalAccessor,
    impersonate,
)


def test_anonymous_when_no_principal_is_set() -> None:
    assert ContextVarPrincipalAccessor().current_actor_name() == ANONYMOUS_PRINCIPAL


def test_impersonate_sets_and_restores_principal() -> None:
    accessor = ContextVarPrincipalAccessor()

    with impersonate("bob"):
        assert accessor.current_actor_name() == "bob"
        with impersonate("alice"):
            assert accessor.current_actor_name() == "alice"
        assert accessor.current_actor_name() == "bob"

    assert accessor.current_actor_name() == ANONYMOUS_PRINCIPAL


def test_blank_principal_falls_back_to_anonymous_name() -> None:
    accessor = ContextVarPrincipalAccessor(anonymous_name="System")

    with impersonate("  "):
        assert accessor.current_actor_name() == "System"

