from __future__ import annotations

import pytest

from content_security_audit.application.ports.activity_type_registry_port import (
    RegistrationError,
)
from content_security_audit.application.services.activity_type_registrar import (
    CONTENT_SECURITY_ACTIVITY_TYPE_NAME,
    build_content_security_activity_type,
    register_content_security_activity,
)
from content_security_audit.domain.activity_type import ActionType, ActivityType
from content_security_audit.domain.security_save_type import SecuritySaveType
from content_security_audit.infrastructure.registry.activity_type_registry import (
    InMemoryActivityTypeRegistry,
)


class FailingRegistry:
    def register(self, activity_type: ActivityType) -> None:
        _ = activity_type
        raise RuntimeError("registry offline")


def test_activity_type_excludes_none_save_type() -> None:
    activity_type = build_content_security_activity_type()

    assert activity_type.name == CONTENT_SECURITY_ACTIVITY_TYPE_NAME
    assert int(SecuritySaveType.NONE) not in activity_type.action_codes()
    assert "None" not in [action.label for action in activity_type.actions]


def test_activity_type_lists_every_other_save_type_in_enum_order() -> None:
    activity_type = build_content_security_activity_type("CustomSecurity")

    assert activity_type.name == "CustomSecurity"
    assert activity_type.actions == tuple(
        ActionType(code=int(save_type), label=save_type.label)
        for save_type in SecuritySaveType
        if save_type is not SecuritySaveType.NONE
    )
    assert ActionType(code=5, label="ItemSaved") in activity_type.actions


def test_duplicate_action_codes_are_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate action codes"):
        ActivityType(
            name="ContentSecurity",
            actions=(ActionType(code=1, label="Replace"), ActionType(code=1, label="Other")),
        )


def test_register_without_registry_raises_registration_error() -> None:
    with pytest.raises(RegistrationError):
        register_content_security_activity(None, build_content_security_activity_type())


def test_registry_failure_is_wrapped_in_registration_error() -> None:
    with pytest.raises(RegistrationError, match="registry offline") as error_info:
        register_content_security_activity(
            FailingRegistry(),
            build_content_security_activity_type(),
        )

    assert isinstance(error_info.value.__cause__, RuntimeError)


def test_registering_twice_replaces_instead_of_duplicating() -> None:
    registry = InMemoryActivityTypeRegistry()
    activity_type = build_content_security_activity_type()

    register_content_security_activity(registry, activity_type)
    register_content_security_activity(registry, activity_type)

    assert registry.list_activity_types() == [activity_type]
    assert registry.get(CONTENT_SECURITY_ACTIVITY_TYPE_NAME) == activity_type
