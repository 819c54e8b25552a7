"""Activity type taxonomy registered with the activity store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ActionType:
    """One loggable action subtype of an activity type."""

    code: int
    label: str


@dataclass(frozen=True)
class ActivityType:
    """Named activity type with its ordered action subtypes."""

    name: str
    actions: tuple[ActionType, ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Activity type name must not be empty")

        codes = [action.code for action in self.actions]
        if len(codes) != len(set(codes)):
            raise ValueError(f"Duplicate action codes in activity type {self.name}: {codes}")

    def action_codes(self) -> tuple[int, ...]:
        """Return action codes in registration order."""

        return tuple(action.code for action in self.actions)
