from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# --- API Request/Response Models ---
class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius: float = Field(..., gt=0, le=5000, description="Search radius in meters")

class PhotoUrls(BaseModel):
    small: str
    large: str

class PlacePhoto(BaseModel):
    urls: PhotoUrls

class EnrichedRestaurant(BaseModel):
    place_id: str
    name: str
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    address: str = ""
    vicinity: Optional[str] = None
    opening_hours: Optional[List[str]] = None
    open_now: Optional[bool] = None
    photos: Optional[List[PlacePhoto]] = None
    types: List[str] = []
    uber_eats_url: Optional[str] = None

class AreaSearchResponse(BaseModel):
    success: bool = True
    data: List[EnrichedRestaurant]
    total: int
    grid_points_count: int

class ErrorResponse(BaseModel):
    success: bool = False
    message: str

# --- Domain Models ---
class GridCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

class RawPlace(BaseModel):
    """One result entry from a Nearby Search response."""
    place_id: str
    name: str
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    vicinity: Optional[str] = None
    open_now: Optional[bool] = None
    photo_reference: Optional[str] = None
    types: List[str] = []

    @classmethod
    def from_api(cls, result: dict) -> "RawPlace":
        photos = result.get("photos") or []
        return cls(
            place_id=result["place_id"],
            name=result.get("name") or "",
            rating=result.get("rating"),
            user_ratings_total=result.get("user_ratings_total"),
            vicinity=result.get("vicinity"),
            open_now=(result.get("opening_hours") or {}).get("open_now"),
            photo_reference=(photos[0] or {}).get("photo_reference") if photos else None,
            types=result.get("types") or [],
        )

class PlaceDetails(BaseModel):
    formatted_address: Optional[str] = None
    weekday_text: Optional[List[str]] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    uber_eats_url: Optional[str] = None

class CellSearchResult(BaseModel):
    """Outcome of the Nearby Search for a single grid cell."""
    cell: GridCell
    places: List[RawPlace] = []
    status: Optional[str] = None
    error_message: Optional[str] = None
    failed: bool = False
