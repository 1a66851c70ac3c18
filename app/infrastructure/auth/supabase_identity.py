from __future__ import annotations

import logging

import httpx

from app.application.ports.identity import IdentityPort
from app.core.config import settings
from app.domain.entities.role import Role, StaffContext

ROLE_PRIORITY = {Role.none: 0, Role.staff: 1, Role.owner: 2}


class SupabaseIdentity(IdentityPort):
    """
    Resolves the caller from a Supabase access token and reads their roles
    from the `user_roles` table. Any failure resolves to Role.none.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        self._client = client or httpx.AsyncClient(timeout=settings.SUPABASE_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url or not self._api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for Supabase auth")

    async def current_user_role(self, access_token: str | None) -> StaffContext:
        if not access_token:
            return StaffContext()

        headers = {"apikey": self._api_key, "Authorization": f"Bearer {access_token}"}
        try:
            user_resp = await self._client.get(f"{self._base_url}/auth/v1/user", headers=headers)
            if user_resp.status_code >= 400:
                self._logger.info("Access token rejected", extra={"status": user_resp.status_code})
                return StaffContext()
            user_id = user_resp.json().get("id")
            if not user_id:
                return StaffContext()

            roles_resp = await self._client.get(
                f"{self._base_url}/rest/v1/user_roles",
                params={"select": "role", "user_id": f"eq.{user_id}"},
                headers=headers,
            )
            roles_resp.raise_for_status()
            rows = roles_resp.json() or []
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Error resolving user role", extra={"error": str(e)})
            return StaffContext()

        role = Role.none
        for row in rows:
            candidate = Role.parse(row.get("role"))
            if ROLE_PRIORITY[candidate] > ROLE_PRIORITY[role]:
                role = candidate
        return StaffContext(role=role, user_id=str(user_id))
