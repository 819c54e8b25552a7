"""Content security change events emitted by the content repository."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag, StrEnum

from content_security_audit.domain.security_save_type import SecuritySaveType


class SecurityEntityType(StrEnum):
    """Kind of principal an access entry applies to."""

    USER = "User"
    GROUP = "Group"
    VISITOR_GROUP = "VisitorGroup"


class AccessLevel(IntFlag):
    """Access rights granted by a permission entry."""

    NO_ACCESS = 0
    READ = 1
    CREATE = 2
    EDIT = 4
    DELETE = 8
    PUBLISH = 16
    ADMINISTER = 32
    FULL_ACCESS = READ | CREATE | EDIT | DELETE | PUBLISH | ADMINISTER

    @property
    def label(self) -> str:
        """Display label, e.g. ``Full`` or ``Read, Edit`` for combined rights."""

        if self == AccessLevel.FULL_ACCESS:
            return "Full"
        if self == AccessLevel.NO_ACCESS:
            return "NoAccess"

        parts = [
            _ACCESS_LABELS[flag]
            for flag in _SINGLE_ACCESS_FLAGS
            if flag in self
        ]
        return ", ".join(parts)


_SINGLE_ACCESS_FLAGS = (
    AccessLevel.READ,
    AccessLevel.CREATE,
    AccessLevel.EDIT,
    AccessLevel.DELETE,
    AccessLevel.PUBLISH,
    AccessLevel.ADMINISTER,
)
_ACCESS_LABELS = {
    AccessLevel.READ: "Read",
    AccessLevel.CREATE: "Create",
    AccessLevel.EDIT: "Edit",
    AccessLevel.DELETE: "Delete",
    AccessLevel.PUBLISH: "Publish",
    AccessLevel.ADMINISTER: "Administer",
}


@dataclass(frozen=True)
class ContentReference:
    """Reference to a content item, optionally pinned to a version or provider."""

    id: int
    work_id: int = 0
    provider_name: str | None = None

    def __str__(self) -> str:
        rendered = str(self.id)
        if self.work_id:
            rendered = f"{rendered}_{self.work_id}"
        if self.provider_name:
            separator = "_" if self.work_id else "__"
            rendered = f"{rendered}{separator}{self.provider_name}"
        return rendered


@dataclass(frozen=True)
class PermissionEntry:
    """Single access-control entry of a security descriptor."""

    entity_type: SecurityEntityType
    name: str
    access: AccessLevel


@dataclass(frozen=True)
class ContentSecurityEvent:
    """Notification that the access rights of a content item were saved.

    ``creator`` is carried as delivered by the repository but is empty in
    practice; attribution always comes from the ambient security principal.
    """

    content_link: ContentReference
    save_type: SecuritySaveType
    entries: tuple[PermissionEntry, ...] = ()
    creator: str | None = None
