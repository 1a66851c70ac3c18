from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    none = "none"
    staff = "staff"
    owner = "owner"

    @staticmethod
    def parse(value: str | None) -> "Role":
        normalized = (value or "").strip().lower()
        for role in Role:
            if role.value == normalized:
                return role
        return Role.none


@dataclass(frozen=True)
class StaffContext:
    """Identity resolved once per request and handed to the agenda use cases."""

    role: Role = Role.none
    user_id: str | None = None

    @property
    def can_manage_agenda(self) -> bool:
        return self.role in (Role.staff, Role.owner)
