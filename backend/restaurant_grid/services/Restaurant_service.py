import asyncio
import logging
import random

from restaurant_grid.core.config import Settings
from restaurant_grid.core.logger import logs
from restaurant_grid.core.places_client import (
    GooglePlacesClient,
    PlacesProviderError,
    PlacesUpstreamError,
)
from restaurant_grid.models.restaurant_model import (
    AreaSearchResponse,
    CellSearchResult,
    EnrichedRestaurant,
    GridCell,
    PhotoUrls,
    PlaceDetails,
    PlacePhoto,
    RawPlace,
    SearchRequest,
)
from restaurant_grid.repos.base_repo import CacheStore
from restaurant_grid.services.Details_service import PlaceDetailsService
from restaurant_grid.services.Grid_service import GridTiler

PLACE_TYPE = "restaurant"
PHOTO_SMALL_WIDTH = 400
PHOTO_LARGE_WIDTH = 800

class RestaurantSearchService:
    def __init__(
        self,
        client: GooglePlacesClient,
        cache: CacheStore,
        settings: Settings,
        tiler: GridTiler | None = None,
        details_service: PlaceDetailsService | None = None,
        rng: random.Random | None = None,
    ):
        self.client = client
        self.cache = cache
        self.settings = settings
        self.tiler = tiler or GridTiler(base_radius=settings.CELL_RADIUS)
        self.details_service = details_service or PlaceDetailsService(client, cache, settings)
        self.rng = rng or random.Random()

    @staticmethod
    def cache_key(request: SearchRequest) -> str:
        # Fixed precision so equal coordinates always map to the same key
        return f"restaurants:{request.latitude:.6f}:{request.longitude:.6f}:{request.radius:.2f}"

    async def search_area(self, request: SearchRequest) -> dict:
        """
        Finds every restaurant inside the requested disc.
        Results are cached as the final JSON payload, so a cache hit returns
        the exact same list in the same order.
        """
        logs.log(logging.INFO, "Area search requested", {
            "latitude": request.latitude,
            "longitude": request.longitude,
            "radius": request.radius,
        })
        return await self.cache.remember(
            self.cache_key(request),
            self.settings.AREA_CACHE_TTL_SECONDS,
            lambda: asyncio.wait_for(
                self._run_search(request), timeout=self.settings.SEARCH_TIMEOUT_SECONDS
            ),
        )

    async def _run_search(self, request: SearchRequest) -> dict:
        # 1. Tile the search disc
        cells = self.tiler.calculate_grid_points(request.latitude, request.longitude, request.radius)
        logs.log(logging.INFO, f"Grid points: {len(cells)}")

        # 2. Fan out one Nearby Search per cell
        cell_semaphore = asyncio.Semaphore(self.settings.MAX_CONCURRENT_CELL_SEARCHES)
        cell_results = await asyncio.gather(
            *(self._search_cell(cell, cell_semaphore) for cell in cells)
        )

        for result in cell_results:
            if result.error_message:
                logs.log(logging.ERROR, "Google API Error", {
                    "status": result.status,
                    "message": result.error_message,
                    "cell": (result.cell.latitude, result.cell.longitude),
                })
                raise PlacesProviderError(result.status or "UNKNOWN", result.error_message)

        # 3. Merge cells, keeping the first occurrence of each place
        places = self._dedupe(cell_results)

        # 4. Enrich each unique place
        details_semaphore = asyncio.Semaphore(self.settings.MAX_CONCURRENT_DETAILS)
        restaurants = list(await asyncio.gather(
            *(self._enrich(place, details_semaphore) for place in places)
        ))

        # 5. Shuffle for variety between areas
        self.rng.shuffle(restaurants)

        failed_cells = sum(1 for r in cell_results if r.failed)
        logs.log(logging.INFO, "Final Results", {
            "total_restaurants": len(restaurants),
            "grid_points": len(cells),
            "failed_cells": failed_cells,
        })

        response = AreaSearchResponse(
            data=restaurants,
            total=len(restaurants),
            grid_points_count=len(cells),
        )
        return response.model_dump(mode="json")

    async def _search_cell(self, cell: GridCell, semaphore: asyncio.Semaphore) -> CellSearchResult:
        async with semaphore:
            try:
                data = await self.client.nearby_search(
                    cell.latitude,
                    cell.longitude,
                    self.settings.CELL_RADIUS,
                    PLACE_TYPE,
                    self.settings.PLACES_LANGUAGE,
                )
            except PlacesUpstreamError as e:
                logs.log(logging.ERROR, "Nearby Search failed, skipping cell", {
                    "cell": (cell.latitude, cell.longitude),
                    "status": e.status,
                    "message": e.message,
                })
                return CellSearchResult(cell=cell, status=e.status, failed=True)

        status = data.get("status", "unknown")
        results = data.get("results") or []
        logs.log(logging.DEBUG, "Nearby Search response", {
            "cell": (cell.latitude, cell.longitude),
            "status": status,
            "results_count": len(results),
        })

        if data.get("error_message"):
            return CellSearchResult(cell=cell, status=status, error_message=data["error_message"])

        places = [RawPlace.from_api(r) for r in results if r.get("place_id")]
        return CellSearchResult(cell=cell, places=places, status=status)

    @staticmethod
    def _dedupe(cell_results: list[CellSearchResult]) -> list[RawPlace]:
        seen_place_ids: set[str] = set()
        unique = []
        for result in cell_results:
            for place in result.places:
                if place.place_id in seen_place_ids:
                    continue
                seen_place_ids.add(place.place_id)
                unique.append(place)
        return unique

    async def _enrich(self, place: RawPlace, semaphore: asyncio.Semaphore) -> EnrichedRestaurant:
        async with semaphore:
            details = await self.details_service.get_place_details(place.place_id)
        return self._build_restaurant(place, details)

    def _build_restaurant(self, place: RawPlace, details: PlaceDetails | None) -> EnrichedRestaurant:
        details = details or PlaceDetails()

        photos = None
        if place.photo_reference:
            photos = [PlacePhoto(urls=PhotoUrls(
                small=self.client.photo_url(place.photo_reference, PHOTO_SMALL_WIDTH),
                large=self.client.photo_url(place.photo_reference, PHOTO_LARGE_WIDTH),
            ))]

        return EnrichedRestaurant(
            place_id=place.place_id,
            name=place.name,
            rating=details.rating if details.rating is not None else place.rating,
            user_ratings_total=(
                details.user_ratings_total
                if details.user_ratings_total is not None
                else place.user_ratings_total
            ),
            address=details.formatted_address or place.vicinity or "",
            vicinity=place.vicinity,
            opening_hours=details.weekday_text,
            open_now=place.open_now,
            photos=photos,
            types=place.types,
            uber_eats_url=details.uber_eats_url,
        )
