import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.agenda import router as agenda_router
from app.api.v1.bookings import router as bookings_router
from app.api.v1.catalog import router as catalog_router
from app.core.config import settings
from app.wiring.dependencies import close_supabase_client


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "appointment_id",
            "status",
            "service_id",
            "provider_id",
            "date",
            "role",
            "reason",
            "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await close_supabase_client()


app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking", version="1.0.0", lifespan=lifespan)

app.include_router(catalog_router, prefix="/api/v1/catalog", tags=["catalog"])
app.include_router(bookings_router, prefix="/api/v1/bookings", tags=["bookings"])
app.include_router(agenda_router, prefix="/api/v1/agenda", tags=["agenda"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
