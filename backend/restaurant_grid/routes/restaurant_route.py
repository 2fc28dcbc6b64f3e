import logging
from functools import lru_cache

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from restaurant_grid.core.config import Settings, settings
from restaurant_grid.core.logger import logs
from restaurant_grid.core.places_client import GooglePlacesClient, PlacesProviderError
from restaurant_grid.models.restaurant_model import AreaSearchResponse, ErrorResponse, SearchRequest
from restaurant_grid.repos.base_repo import CacheStore
from restaurant_grid.repos.local_repo import LocalCacheStore
from restaurant_grid.repos.memory_repo import MemoryCacheStore
from restaurant_grid.repos.mongo_repo import MongoCacheStore
from restaurant_grid.services.Restaurant_service import RestaurantSearchService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])

# --- Dependency Injection ---
def get_settings() -> Settings:
    return settings

@lru_cache
def get_cache_store() -> CacheStore:
    """Builds the configured cache store once per process."""
    backend = settings.CACHE_BACKEND
    if backend == "mongodb":
        # Motor client is non-blocking and connects lazily
        client = AsyncIOMotorClient(settings.MONGO_URI)
        logs.log(logging.INFO, "MongoDB cache initialized", {"db": settings.MONGO_DB_NAME})
        return MongoCacheStore(client[settings.MONGO_DB_NAME])
    if backend == "memory":
        return MemoryCacheStore()
    if backend == "local":
        return LocalCacheStore(settings.CACHE_DIR)
    raise RuntimeError(f"Unknown CACHE_BACKEND '{backend}'")

def get_places_client(config: Settings = Depends(get_settings)) -> GooglePlacesClient:
    return GooglePlacesClient(config.GOOGLE_MAPS_API_KEY, timeout=config.HTTP_TIMEOUT_SECONDS)

def get_search_service(
    client: GooglePlacesClient = Depends(get_places_client),
    cache: CacheStore = Depends(get_cache_store),
    config: Settings = Depends(get_settings),
) -> RestaurantSearchService:
    return RestaurantSearchService(client, cache, config)

@router.post(
    "/search-area",
    response_model=AreaSearchResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def search_restaurants_in_area(
    request: SearchRequest,
    service: RestaurantSearchService = Depends(get_search_service),
):
    try:
        payload = await service.search_area(request)
    except PlacesProviderError as e:
        logs.log(logging.ERROR, f"Places provider rejected the search: {e.status} {e.message}")
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(message=e.message).model_dump(),
        )
    except Exception as e:
        logs.logger.exception(f"Error in search_restaurants_in_area: {str(e)}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message=str(e) or e.__class__.__name__).model_dump(),
        )

    # Cached payloads are returned untouched
    return JSONResponse(content=payload)
