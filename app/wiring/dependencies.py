from functools import lru_cache
import logging

import httpx
from fastapi import Depends, Header

from app.core.config import settings
from app.application.ports.identity import IdentityPort
from app.application.ports.record_store import RecordStorePort
from app.application.use_cases.catalog import CatalogLoader
from app.application.use_cases.reserve_appointment import ReservationCommitter
from app.domain.entities.role import StaffContext
from app.infrastructure.auth.static_identity import StaticIdentity
from app.infrastructure.auth.supabase_identity import SupabaseIdentity
from app.infrastructure.store.memory_store import MemoryRecordStore
from app.infrastructure.store.supabase_store import SupabaseRecordStore


logger = logging.getLogger(__name__)

_memory_store: MemoryRecordStore | None = None


def get_memory_store() -> MemoryRecordStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = MemoryRecordStore(unique_slots=settings.UNIQUE_SLOTS)
    return _memory_store


def get_access_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@lru_cache
def get_supabase_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.SUPABASE_TIMEOUT_SECONDS)


async def close_supabase_client() -> None:
    if get_supabase_client.cache_info().currsize:
        await get_supabase_client().aclose()
        get_supabase_client.cache_clear()


def get_record_store(access_token: str | None = Depends(get_access_token)) -> RecordStorePort:
    if settings.RECORD_STORE.lower() == "supabase":
        # One pooled client per process; the caller token travels per request.
        return SupabaseRecordStore(access_token=access_token, client=get_supabase_client())
    if settings.ENV.lower() not in {"dev", "local", "test"}:
        logger.warning("Using in-memory record store", extra={"reason": f"ENV={settings.ENV}"})
    return get_memory_store()


@lru_cache
def get_identity() -> IdentityPort:
    if settings.AUTH_PROVIDER.lower() == "supabase":
        return SupabaseIdentity(client=get_supabase_client())
    if settings.ENV.lower() not in {"dev", "local", "test"}:
        raise ValueError("AUTH_PROVIDER=static is only allowed in dev/local/test")
    logger.info("Using StaticIdentity", extra={"role": settings.DEV_ROLE})
    return StaticIdentity(role=settings.DEV_ROLE)


async def get_staff_context(
    access_token: str | None = Depends(get_access_token),
    identity: IdentityPort = Depends(get_identity),
) -> StaffContext:
    return await identity.current_user_role(access_token)


def get_catalog_loader(store: RecordStorePort = Depends(get_record_store)) -> CatalogLoader:
    return CatalogLoader(store=store, default_specialty=settings.DEFAULT_PROVIDER_SPECIALTY)


def get_reservation_committer(store: RecordStorePort = Depends(get_record_store)) -> ReservationCommitter:
    return ReservationCommitter(store=store)
