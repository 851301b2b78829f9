import os

# Basic settings helper to read environment configuration.


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _as_float(val: str | None) -> float | None:
    if val is None or not val.strip():
        return None
    try:
        return float(val)
    except ValueError:
        return None


class Settings:
    def __init__(self) -> None:
        self.GEOAPIFY_API_KEY: str = os.getenv("GEOAPIFY_API_KEY", "")
        self.MAPBOX_ACCESS_TOKEN: str = os.getenv("MAPBOX_ACCESS_TOKEN", "")
        self.PLACES_API_BASE_URL: str = os.getenv("PLACES_API_BASE_URL", "http://localhost:8000")
        # None keeps the requests default (no timeout)
        self.HTTP_TIMEOUT_SEC: float | None = _as_float(os.getenv("HTTP_TIMEOUT_SEC"))
        self.SEARCH_DEBOUNCE_MS: int = _as_int(os.getenv("SEARCH_DEBOUNCE_MS"), 300)
        self.DATABASE_URL: str | None = os.getenv("DATABASE_URL")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
