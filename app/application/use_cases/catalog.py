from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.application.exceptions import CatalogUnavailable, RecordStoreError
from app.application.ports.record_store import RecordStorePort
from app.application.utils.records import provider_from_row, service_from_row
from app.domain.entities.provider import Provider
from app.domain.entities.service import Service


@dataclass(frozen=True)
class CatalogSnapshot:
    state: str = "loading"  # "loading", "ready", "unavailable"
    services: list[Service] = field(default_factory=list)
    providers: list[Provider] = field(default_factory=list)
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.state == "ready" and not self.services


class CatalogLoader:
    def __init__(self, store: RecordStorePort, default_specialty: str = "Barber") -> None:
        self._store = store
        self._default_specialty = default_specialty
        self._snapshot = CatalogSnapshot()
        self._logger = logging.getLogger(__name__)

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    async def load_services(self) -> list[Service]:
        try:
            rows = await self._store.select_services()
            services = [service_from_row(row) for row in rows if row.get("is_active", True)]
        except (RecordStoreError, KeyError, ValueError) as e:
            self._logger.error("Error loading services", extra={"error": str(e)})
            raise CatalogUnavailable("Services are unavailable right now") from e
        return sorted(services, key=lambda s: s.price)

    async def load_providers(self) -> list[Provider]:
        try:
            rows = await self._store.select_providers()
            providers = [
                provider_from_row(row, self._default_specialty)
                for row in rows
                if row.get("is_active", True)
            ]
        except (RecordStoreError, KeyError, ValueError) as e:
            self._logger.error("Error loading barbers", extra={"error": str(e)})
            raise CatalogUnavailable("Barbers are unavailable right now") from e
        return sorted(providers, key=lambda p: p.name)

    async def refresh(self) -> CatalogSnapshot:
        """
        Reload both lists. On failure the previous lists are kept so the caller
        still has something to render, and the snapshot is marked unavailable.
        """
        try:
            services = await self.load_services()
            providers = await self.load_providers()
        except CatalogUnavailable as e:
            self._snapshot = CatalogSnapshot(
                state="unavailable",
                services=self._snapshot.services,
                providers=self._snapshot.providers,
                error=str(e),
            )
            return self._snapshot

        self._snapshot = CatalogSnapshot(state="ready", services=services, providers=providers)
        self._logger.info(
            "Catalog loaded",
            extra={"services": len(services), "providers": len(providers)},
        )
        return self._snapshot
