from __future__ import annotations

from app.application.ports.identity import IdentityPort
from app.domain.entities.role import Role, StaffContext


class StaticIdentity(IdentityPort):
    """Grants one fixed role to every caller. For dev/local runs."""

    def __init__(self, role: Role | str = Role.staff, user_id: str = "local-user") -> None:
        self._context = StaffContext(role=Role.parse(role), user_id=user_id)

    async def current_user_role(self, access_token: str | None) -> StaffContext:
        return self._context
