from __future__ import annotations

import pytest

from apps.audit_log.main import build_audit_log_runtime
from content_security_audit.application.ports.activity_repository_port import (
    ActivityRepositoryPort,
)
from content_security_audit.application.ports.activity_type_registry_port import (
    ActivityTypeRegistryPort,
)
from content_security_audit.application.ports.content_security_event_source_port import (
    ContentSecurityEventSourcePort,
)
from content_security_audit.application.services.audit_log_module import ModuleState
from content_security_audit.config.settings import Settings
from content_security_audit.infrastructure.db.activity_repository import (
    SqlAlchemyActivityRepository,
)
from content_security_audit.infrastructure.registry.activity_type_registry import (
    InMemoryActivityTypeRegistry,
)


def _settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./unused.db")
    monkeypatch.setenv("AUDIT_ACTIVITY_TYPE_NAME", "AccessRights")
    return Settings(_env_file=None)


def test_runtime_container_resolves_every_start_dependency(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime = build_audit_log_runtime(settings=_settings(monkeypatch))

    assert isinstance(
        runtime.container.resolve(ActivityTypeRegistryPort),
        InMemoryActivityTypeRegistry,
    )
    assert isinstance(
        runtime.container.resolve(ActivityRepositoryPort),
        SqlAlchemyActivityRepository,
    )
    assert (
        runtime.container.resolve(ContentSecurityEventSourcePort)
        is runtime.content_security_repository
    )
    assert runtime.module.state is ModuleState.INACTIVE


def test_runtime_start_registers_configured_activity_type(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime = build_audit_log_runtime(settings=_settings(monkeypatch))

    try:
        assert runtime.module.start(runtime.container) is True
        registry = runtime.container.resolve(ActivityTypeRegistryPort)
        assert registry.get("AccessRights") is not None
        assert runtime.content_security_repository.handler_count == 1
    finally:
        runtime.module.stop(runtime.container)
        runtime.module.close()

    assert runtime.content_security_repository.handler_count == 0
