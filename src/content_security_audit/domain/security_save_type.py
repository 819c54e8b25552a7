"""Save-type classification for content security changes."""

from __future__ import annotations

from enum import IntEnum


class SecuritySaveType(IntEnum):
    """Why or how a content security descriptor was saved."""

    NONE = 0
    REPLACE = 1
    MODIFY = 2
    REPLACE_CHILD_PERMISSIONS = 3
    MERGE_CHILD_PERMISSIONS = 4
    ITEM_SAVED = 5
    ITEM_COPIED = 6
    ITEM_MOVED = 7

    @property
    def label(self) -> str:
        """Display label used in audit messages and action types."""

        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label
