"""Lifecycle of the content security audit log subscription."""

from __future__ import annotations

import logging
import threading
from enum import StrEnum

from content_security_audit.application.ports.activity_repository_port import (
    ActivityRepositoryPort,
)
from content_security_audit.application.ports.activity_type_registry_port import (
    ActivityTypeRegistryPort,
)
from content_security_audit.application.ports.content_security_event_source_port import (
    ContentSecurityEventSourcePort,
    UnsubscribeError,
)
from content_security_audit.application.ports.principal_accessor_port import (
    PrincipalAccessorPort,
)
from content_security_audit.application.ports.service_resolver_port import (
    DependencyUnavailableError,
    ServiceResolverPort,
)
from content_security_audit.application.services.activity_type_registrar import (
    CONTENT_SECURITY_ACTIVITY_TYPE_NAME,
    build_content_security_activity_type,
    register_content_security_activity,
)
from content_security_audit.application.services.audit_persister import (
    AuditPersister,
    AuditRecord,
)
from content_security_audit.application.services.change_formatter import (
    ContentSecurityChangeFormatter,
)
from content_security_audit.domain.content_security import ContentSecurityEvent

logger = logging.getLogger(__name__)
_MESSAGE_KEY = "Message"


class ModuleState(StrEnum):
    """Audit log module lifecycle states."""

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"


class ContentSecurityAuditModule:
    """Subscribe to content security changes and write them to the activity log.

    Startup never raises: when a collaborator is missing or fails, the module
    logs the failing step and stays inactive so the host keeps running without
    audit logging.
    """

    def __init__(
        self,
        *,
        principal_accessor: PrincipalAccessorPort,
        persister: AuditPersister | None = None,
        activity_type_name: str = CONTENT_SECURITY_ACTIVITY_TYPE_NAME,
        log_messages: bool = True,
    ) -> None:
        self._formatter = ContentSecurityChangeFormatter(principal_accessor=principal_accessor)
        self._persister = persister or AuditPersister()
        self._activity_type_name = activity_type_name
        self._log_messages = log_messages
        self._lifecycle_lock = threading.Lock()
        self._state = ModuleState.INACTIVE
        self._activity_repository: ActivityRepositoryPort | None = None
        self._event_source: ContentSecurityEventSourcePort | None = None

    @property
    def state(self) -> ModuleState:
        """Current lifecycle state."""

        return self._state

    def start(self, resolver: ServiceResolverPort | None) -> bool:
        """Register the activity type and subscribe to security changes."""

        with self._lifecycle_lock:
            if self._state is ModuleState.ACTIVE:
                return True

            if resolver is None:
                _log_start_failure(
                    "resolve_activity_type_registry",
                    DependencyUnavailableError("no service resolver"),
                )
                return False

            try:
                registry = resolver.resolve(ActivityTypeRegistryPort)
            except Exception as error:  # noqa: BLE001
                _log_start_failure("resolve_activity_type_registry", error)
                return False

            try:
                register_content_security_activity(
                    registry,
                    build_content_security_activity_type(self._activity_type_name),
                )
            except Exception as error:  # noqa: BLE001
                _log_start_failure("register_activity_type", error)
                return False

            try:
                activity_repository = resolver.resolve(ActivityRepositoryPort)
            except Exception as error:  # noqa: BLE001
                _log_start_failure("resolve_activity_repository", error)
                return False

            try:
                event_source = resolver.resolve(ContentSecurityEventSourcePort)
                # Handles must be in place before the first event can arrive.
                self._activity_repository = activity_repository
                event_source.subscribe(self.handle_security_saved)
            except Exception as error:  # noqa: BLE001
                self._activity_repository = None
                _log_start_failure("subscribe_content_security_events", error)
                return False

            self._event_source = event_source
            self._state = ModuleState.ACTIVE
            logger.info(
                "audit_log_started activity_type=%s",
                self._activity_type_name,
            )
            return True

    def stop(self, resolver: ServiceResolverPort | None) -> None:
        """Detach the change handler; no-op when the module is not active."""

        with self._lifecycle_lock:
            if self._state is not ModuleState.ACTIVE:
                logger.debug("audit_log_stop_skipped state=%s", self._state)
                return

            try:
                if resolver is None:
                    raise DependencyUnavailableError("no service resolver")
                event_source = resolver.resolve(ContentSecurityEventSourcePort)
            except Exception as error:  # noqa: BLE001
                logger.warning(
                    "audit_log_stop_incomplete reason=event source unavailable error=%s; "
                    "content security handler stays subscribed",
                    error,
                )
                return

            try:
                event_source.unsubscribe(self.handle_security_saved)
            except Exception as error:  # noqa: BLE001
                failure = UnsubscribeError(f"Failed to unsubscribe change handler: {error}")
                logger.error("audit_log_stop_failed error=%s", failure, exc_info=error)
                return

            self._state = ModuleState.INACTIVE
            self._event_source = None
            self._activity_repository = None
            logger.info("audit_log_stopped")

    def close(self) -> None:
        """Finish in-flight writes and release the persister; call at host shutdown."""

        self._persister.close()

    def handle_security_saved(self, event: ContentSecurityEvent) -> None:
        """Write one activity for event; never raises into the event source."""

        try:
            activity_repository = self._activity_repository
            if activity_repository is None:
                logger.warning(
                    "content_security_event_ignored content_link=%s reason=module not active",
                    event.content_link,
                )
                return

            message = self._formatter.format(event)
            if self._log_messages:
                logger.info(message)

            record = AuditRecord(
                activity_type=self._activity_type_name,
                action=event.save_type,
                data={_MESSAGE_KEY: message},
            )
            activity_id = self._persister.persist(activity_repository, record)
            logger.debug("content_security_activity_saved activity_id=%s", activity_id)
        except Exception:  # noqa: BLE001
            logger.exception(
                "content_security_event_failed content_link=%s save_type=%s",
                getattr(event, "content_link", None),
                getattr(event, "save_type", None),
            )


def _log_start_failure(step: str, error: Exception) -> None:
    logger.error(
        "audit_log_start_failed step=%s error=%s; audit logging not active",
        step,
        error,
        exc_info=error,
    )
