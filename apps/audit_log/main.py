"""audit-log host entrypoint."""

from __future__ import annotations

import logging
import signal
import threading
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from content_security_audit.application.ports.activity_repository_port import (
    ActivityRepositoryPort,
)
from content_security_audit.application.ports.activity_type_registry_port import (
    ActivityTypeRegistryPort,
)
from content_security_audit.application.ports.content_security_event_source_port import (
    ContentSecurityEventSourcePort,
)
from content_security_audit.application.services.audit_log_module import (
    ContentSecurityAuditModule,
)
from content_security_audit.application.services.audit_persister import AuditPersister
from content_security_audit.config.settings import Settings, load_settings
from content_security_audit.infrastructure.db.activity_repository import (
    SqlAlchemyActivityRepository,
)
from content_security_audit.infrastructure.db.session import (
    create_session_factory,
    dispose_session_factory,
)
from content_security_audit.infrastructure.di.service_container import ServiceContainer
from content_security_audit.infrastructure.logging import configure_logging
from content_security_audit.infrastructure.registry.activity_type_registry import (
    InMemoryActivityTypeRegistry,
)
from content_security_audit.infrastructure.security.content_security_repository import (
    InMemoryContentSecurityRepository,
)
from content_security_audit.infrastructure.security.principal_accessor import (
    ContextVarPrincipalAccessor,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditLogRuntime:
    """Composed audit log module and the collaborators it resolves."""

    settings: Settings
    container: ServiceContainer
    module: ContentSecurityAuditModule
    persister: AuditPersister
    session_factory: async_sessionmaker[AsyncSession]
    content_security_repository: InMemoryContentSecurityRepository


def build_service_container(
    *,
    session_factory: async_sessionmaker[AsyncSession],
    content_security_repository: ContentSecurityEventSourcePort,
) -> ServiceContainer:
    """Register the collaborators the audit log module resolves at start."""

    container = ServiceContainer()
    container.register_instance(ActivityTypeRegistryPort, InMemoryActivityTypeRegistry())
    container.register_factory(
        ActivityRepositoryPort,
        lambda: SqlAlchemyActivityRepository(session_factory),
    )
    container.register_instance(ContentSecurityEventSourcePort, content_security_repository)
    return container


def build_audit_log_runtime(
    *,
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    content_security_repository: InMemoryContentSecurityRepository | None = None,
) -> AuditLogRuntime:
    """Compose the audit log module with SQLAlchemy storage and in-process adapters."""

    runtime_session_factory = session_factory or create_session_factory(settings.database_url)
    runtime_repository = content_security_repository or InMemoryContentSecurityRepository()
    principal_accessor = ContextVarPrincipalAccessor()
    persister = AuditPersister()

    container = build_service_container(
        session_factory=runtime_session_factory,
        content_security_repository=runtime_repository,
    )
    module = ContentSecurityAuditModule(
        principal_accessor=principal_accessor,
        persister=persister,
        activity_type_name=settings.audit_activity_type_name,
        log_messages=settings.audit_log_messages,
    )
    return AuditLogRuntime(
        settings=settings,
        container=container,
        module=module,
        persister=persister,
        session_factory=runtime_session_factory,
        content_security_repository=runtime_repository,
    )


def shutdown_audit_log_runtime(runtime: AuditLogRuntime) -> None:
    """Unsubscribe, close store connections, and stop the persister loop."""

    runtime.module.stop(runtime.container)
    try:
        runtime.persister.run_on_store_loop(dispose_session_factory(runtime.session_factory))
    finally:
        runtime.module.close()


def main() -> None:
    """Start the audit log module and keep it subscribed until interrupted."""

    settings = load_settings()
    configure_logging(level=settings.log_level)
    logger.info(
        "audit_log_host_starting activity_type=%s log_messages=%s",
        settings.audit_activity_type_name,
        settings.audit_log_messages,
    )

    runtime = build_audit_log_runtime(settings=settings)
    if not runtime.module.start(runtime.container):
        logger.warning("audit_log_host_running_without_audit_logging")

    stop_event = threading.Event()
    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, lambda *_: stop_event.set())

    stop_event.wait()
    logger.info("audit_log_host_stopping")
    shutdown_audit_log_runtime(runtime)


if __name__ == "__main__":
    main()
