import logging
from urllib.parse import quote_plus

from restaurant_grid.core.config import Settings
from restaurant_grid.core.logger import logs
from restaurant_grid.core.places_client import GooglePlacesClient
from restaurant_grid.models.restaurant_model import PlaceDetails
from restaurant_grid.repos.base_repo import CacheStore

DETAIL_FIELDS = ["formatted_address", "opening_hours", "rating", "user_ratings_total", "name", "geometry"]
UBER_EATS_DOMAIN = "ubereats.com"
UBER_EATS_STORE_URL = "https://www.ubereats.com/tw/store/{name}-{lat}-{lng}"

class PlaceDetailsService:
    def __init__(self, client: GooglePlacesClient, cache: CacheStore, settings: Settings):
        self.client = client
        self.cache = cache
        self.settings = settings

    async def get_place_details(self, place_id: str) -> PlaceDetails | None:
        """
        Cached Place Details lookup. Never raises: any failure is logged and
        returns None so the caller can fall back to the Nearby Search data.
        """
        try:
            cached = await self.cache.remember(
                f"place_details:{place_id}",
                self.settings.DETAILS_CACHE_TTL_SECONDS,
                lambda: self._fetch_details(place_id),
            )
            if cached is None:
                return None
            return PlaceDetails(**cached)
        except Exception as e:
            logs.log(logging.ERROR, f"Place details cache failed for {place_id}: {e!r}")
            return None

    async def _fetch_details(self, place_id: str) -> dict | None:
        try:
            data = await self.client.place_details(
                place_id, DETAIL_FIELDS, language=self.settings.PLACES_LANGUAGE
            )
            status = data.get("status", "unknown")
            if status != "OK":
                logs.log(logging.WARNING, "Place Details lookup not OK", {
                    "place_id": place_id,
                    "status": status,
                    "error_message": data.get("error_message"),
                })
                return None

            result = data.get("result") or {}
            opening_hours = result.get("opening_hours") or {}

            details = PlaceDetails(
                formatted_address=result.get("formatted_address"),
                weekday_text=opening_hours.get("weekday_text"),
                rating=result.get("rating"),
                user_ratings_total=result.get("user_ratings_total"),
                uber_eats_url=await self._resolve_uber_eats_url(place_id, result),
            )
            return details.model_dump()

        except Exception as e:
            logs.log(logging.ERROR, f"Failed to fetch place details for {place_id}: {str(e)}")
            return None

    async def _resolve_uber_eats_url(self, place_id: str, result: dict) -> str | None:
        """
        Uses the place's website when it already points at Uber Eats, otherwise
        builds a store URL from the name and coordinates.
        Only attempted for places that report a location.
        """
        location = (result.get("geometry") or {}).get("location")
        if not location:
            return None

        try:
            data = await self.client.place_details(place_id, ["website"])
        except Exception as e:
            logs.log(logging.WARNING, f"Website lookup failed for {place_id}: {str(e)}")
            return None

        website = (data.get("result") or {}).get("website") or ""
        if UBER_EATS_DOMAIN in website:
            return website

        return UBER_EATS_STORE_URL.format(
            name=quote_plus(result.get("name") or ""),
            lat=location.get("lat"),
            lng=location.get("lng"),
        )
