from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from app.application.exceptions import RecordStoreError
from app.application.ports.record_store import RecordStorePort
from app.core.config import settings

APPOINTMENT_COLUMNS = (
    "id,barber_id,service_id,appointment_date,appointment_time,"
    "customer_name,customer_phone,customer_email,status,"
    "services(name,duration),barbers(name)"
)


class SupabaseRecordStore(RecordStorePort):
    """PostgREST tables `services`, `barbers` and `appointments` of a Supabase project."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SUPABASE_URL or "").rstrip("/")
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        self._access_token = access_token

        if not self._base_url:
            raise ValueError("SUPABASE_URL is required for the Supabase record store")
        if not self._api_key:
            raise ValueError("SUPABASE_ANON_KEY is required for the Supabase record store")

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.SUPABASE_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def select_services(self) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "services",
            params={"select": "id,name,price,duration", "is_active": "eq.true", "order": "price.asc"},
        )

    async def select_providers(self) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "barbers",
            params={"select": "id,name,specialty,avatar_url", "is_active": "eq.true", "order": "name.asc"},
        )

    async def insert_appointment(self, row: dict[str, Any]) -> dict[str, Any]:
        rows = await self._request(
            "POST",
            "appointments",
            json=row,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise RecordStoreError("Insert returned no row")
        return rows[0]

    async def select_appointments(self, day: date) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            "appointments",
            params={
                "select": APPOINTMENT_COLUMNS,
                "appointment_date": f"eq.{day.isoformat()}",
                "order": "appointment_time.asc",
            },
        )

    async def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        expected_status: str | None = None,
    ) -> dict[str, Any] | None:
        params = {"id": f"eq.{appointment_id}", "select": APPOINTMENT_COLUMNS}
        if expected_status is not None:
            params["status"] = f"eq.{expected_status}"
        rows = await self._request(
            "PATCH",
            "appointments",
            params=params,
            json={"status": status},
            headers={"Prefer": "return=representation"},
        )
        return rows[0] if rows else None

    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        url = f"{self._base_url}/rest/v1/{table}"
        request_headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            **(headers or {}),
        }
        try:
            resp = await self._client.request(method, url, params=params, json=json, headers=request_headers)
        except httpx.HTTPError as e:
            self._logger.error("Record store unreachable", extra={"error": str(e), "table": table})
            raise RecordStoreError(f"Record store unreachable: {e}") from e

        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("message") or resp.text
            except Exception:
                error_message = resp.text
            self._logger.error(
                "Record store request failed",
                extra={"status": resp.status_code, "table": table, "error": error_message},
            )
            raise RecordStoreError(error_message, status_code=resp.status_code)

        if not resp.content:
            return []
        try:
            data = resp.json()
        except ValueError as e:
            raise RecordStoreError("Record store returned invalid JSON") from e
        if isinstance(data, dict):
            return [data]
        return list(data)
