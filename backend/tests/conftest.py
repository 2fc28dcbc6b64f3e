from __future__ import annotations

import random

import pytest

from restaurant_grid.core.config import Settings
from restaurant_grid.repos.memory_repo import MemoryCacheStore
from restaurant_grid.services.Grid_service import GridTiler
from restaurant_grid.services.Restaurant_service import RestaurantSearchService

TAIPEI_101 = (25.0330, 121.5654)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePlacesClient:
    """In-memory stand-in for GooglePlacesClient.

    Handlers return a response dict, or an exception instance to raise.
    """

    def __init__(self, nearby=None, details=None, website=None):
        self.nearby = nearby or (lambda lat, lng: {"status": "ZERO_RESULTS", "results": []})
        self.details = details or (lambda place_id: {"status": "OK", "result": {}})
        self.website = website or (lambda place_id: {"status": "OK", "result": {}})
        self.nearby_calls: list[tuple[float, float]] = []
        self.details_calls: list[str] = []
        self.website_calls: list[str] = []

    async def nearby_search(self, lat, lng, radius, place_type, language):
        self.nearby_calls.append((lat, lng))
        return _unwrap(self.nearby(lat, lng))

    async def place_details(self, place_id, fields, language=None):
        if list(fields) == ["website"]:
            self.website_calls.append(place_id)
            return _unwrap(self.website(place_id))
        self.details_calls.append(place_id)
        return _unwrap(self.details(place_id))

    def photo_url(self, photo_reference, max_width=400):
        return f"https://photos.test/{photo_reference}?maxwidth={max_width}"


def _unwrap(response):
    if isinstance(response, Exception):
        raise response
    return response


def place(place_id: str, **extra) -> dict:
    result = {"place_id": place_id, "name": f"Restaurant {place_id}", "types": ["restaurant"]}
    result.update(extra)
    return result


def cells_for(radius: float, center=TAIPEI_101):
    return GridTiler().calculate_grid_points(center[0], center[1], radius)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        GOOGLE_MAPS_API_KEY="test-key",
        CACHE_BACKEND="memory",
        MAX_CONCURRENT_CELL_SEARCHES=2,
        MAX_CONCURRENT_DETAILS=2,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def make_service(settings, cache):
    def _make(client: FakePlacesClient, seed: int | None = None) -> RestaurantSearchService:
        rng = random.Random(seed) if seed is not None else None
        return RestaurantSearchService(client, cache, settings, rng=rng)

    return _make
