"""
Google Places API client.
Wraps the Nearby Search, Place Details and Place Photo endpoints used by the grid search.
"""
import httpx
import logging
from restaurant_grid.core.logger import logs

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"


class PlacesUpstreamError(Exception):
    """Transport or HTTP level failure talking to the Places API."""

    def __init__(self, status: str, message: str | None = None):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


class PlacesProviderError(Exception):
    """The Places API answered but embedded an error_message in the response."""

    def __init__(self, status: str, message: str):
        self.status = status
        self.message = message
        super().__init__(message)


class GooglePlacesClient:
    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        base_url: str = PLACES_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def nearby_search(
        self, lat: float, lng: float, radius: float, place_type: str, language: str
    ) -> dict:
        """
        Runs one Nearby Search around (lat, lng).
        The raw JSON is returned as-is; callers inspect `status` and `error_message`.
        """
        params = {
            "location": f"{lat},{lng}",
            "radius": radius,
            "type": place_type,
            "key": self.api_key,
            "language": language,
        }
        return await self._get_json("nearbysearch/json", params)

    async def place_details(
        self, place_id: str, fields: list[str], language: str | None = None
    ) -> dict:
        params = {
            "place_id": place_id,
            "fields": ",".join(fields),
            "key": self.api_key,
        }
        if language:
            params["language"] = language
        return await self._get_json("details/json", params)

    def photo_url(self, photo_reference: str, max_width: int = 400) -> str:
        """Builds a Place Photo URL. No request is made."""
        return (
            f"{self.base_url}/photo?maxwidth={max_width}"
            f"&photo_reference={photo_reference}&key={self.api_key}"
        )

    async def _get_json(self, path: str, params: dict) -> dict:
        url = f"{self.base_url}/{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                logs.log(logging.ERROR, "Places API request failed", {
                    "endpoint": path,
                    "status": e.response.status_code,
                    "body": e.response.text[:500],
                })
                raise PlacesUpstreamError(str(e.response.status_code), e.response.text[:500]) from e
            except (httpx.HTTPError, ValueError) as e:
                logs.log(logging.ERROR, f"Places API transport error on {path}: {str(e)}")
                raise PlacesUpstreamError("TRANSPORT_ERROR", str(e)) from e
