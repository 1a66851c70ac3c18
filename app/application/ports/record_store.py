from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any


class RecordStorePort(ABC):
    """
    Row-level contract of the backing store.

    Rows are plain dicts shaped like the store's tables. Adapters raise
    RecordStoreError for any store-level failure.
    """

    @abstractmethod
    async def select_services(self) -> list[dict[str, Any]]:
        """Active services ordered by price ascending: {id, name, price, duration}."""
        raise NotImplementedError

    @abstractmethod
    async def select_providers(self) -> list[dict[str, Any]]:
        """Active barbers ordered by name ascending: {id, name, specialty, avatar_url}."""
        raise NotImplementedError

    @abstractmethod
    async def insert_appointment(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one appointment. Returns the stored row including its assigned id."""
        raise NotImplementedError

    @abstractmethod
    async def select_appointments(self, day: date) -> list[dict[str, Any]]:
        """
        Appointments of one calendar day ordered by time ascending.
        Each row carries the joined `services: {name, duration}` and `barbers: {name}`.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        expected_status: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Set the status of one appointment.
        With `expected_status`, only a row currently in that status is updated.
        Returns the updated row, or None when no row matched.
        """
        raise NotImplementedError
