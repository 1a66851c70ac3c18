from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import ProviderSchema, ServiceSchema
from app.application.exceptions import CatalogUnavailable
from app.application.use_cases.catalog import CatalogLoader
from app.wiring.dependencies import get_catalog_loader

router = APIRouter()


@router.get("/services", response_model=list[ServiceSchema])
async def list_services(loader: CatalogLoader = Depends(get_catalog_loader)):
    try:
        services = await loader.load_services()
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [ServiceSchema.from_entity(s) for s in services]


@router.get("/providers", response_model=list[ProviderSchema])
async def list_providers(loader: CatalogLoader = Depends(get_catalog_loader)):
    try:
        providers = await loader.load_providers()
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [ProviderSchema.from_entity(p) for p in providers]
