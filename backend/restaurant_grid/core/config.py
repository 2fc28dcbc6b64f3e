from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Google Places
    GOOGLE_MAPS_API_KEY: str = ""
    PLACES_LANGUAGE: str = "zh-TW"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Cache backend: "memory", "local" or "mongodb"
    CACHE_BACKEND: str = "local"
    CACHE_DIR: str = "data/cache"

    # MongoDB Configuration (only needed if CACHE_BACKEND=mongodb)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "restaurant_grid_db"

    LOGGER: int = 20
    LOG_DIR: str = "logs"

    # Cache lifetimes
    AREA_CACHE_TTL_SECONDS: int = 7 * 24 * 60 * 60
    DETAILS_CACHE_TTL_SECONDS: int = 30 * 24 * 60 * 60

    # Grid search
    CELL_RADIUS: int = 1000
    MAX_CONCURRENT_CELL_SEARCHES: int = 5
    MAX_CONCURRENT_DETAILS: int = 5
    SEARCH_TIMEOUT_SECONDS: float = 120.0

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
