"""Registration of the content security activity type and its actions."""

from __future__ import annotations

import logging

from content_security_audit.application.ports.activity_type_registry_port import (
    ActivityTypeRegistryPort,
    RegistrationError,
)
from content_security_audit.domain.activity_type import ActionType, ActivityType
from content_security_audit.domain.security_save_type import SecuritySaveType

CONTENT_SECURITY_ACTIVITY_TYPE_NAME = "ContentSecurity"
logger = logging.getLogger(__name__)


def build_content_security_activity_type(
    name: str = CONTENT_SECURITY_ACTIVITY_TYPE_NAME,
) -> ActivityType:
    """Build the activity type with one action per save type except NONE."""

    # NONE never shows up as an action; log views treat it as "all actions".
    actions = tuple(
        ActionType(code=int(save_type), label=save_type.label)
        for save_type in SecuritySaveType
        if save_type is not SecuritySaveType.NONE
    )
    return ActivityType(name=name, actions=actions)


def register_content_security_activity(
    registry: ActivityTypeRegistryPort | None,
    activity_type: ActivityType,
) -> None:
    """Upsert activity_type into registry; safe to call on every start."""

    if registry is None:
        raise RegistrationError("Activity type registry is not available")

    try:
        registry.register(activity_type)
    except Exception as error:  # noqa: BLE001
        raise RegistrationError(
            f"Failed to register activity type {activity_type.name}: {error}"
        ) from error

    logger.info(
        "activity_type_registered name=%s action_codes=%s",
        activity_type.name,
        list(activity_type.action_codes()),
    )
