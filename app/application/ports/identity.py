from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.role import StaffContext


class IdentityPort(ABC):
    @abstractmethod
    async def current_user_role(self, access_token: str | None) -> StaffContext:
        """Resolve the caller's role. Unknown or anonymous callers resolve to Role.none."""
        raise NotImplementedError
