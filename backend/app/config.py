"""Application settings.

Loaded from environment variables and an optional ``.env`` file next to the
backend package. Upstream endpoints default to the public OSM services.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), env_file_encoding="utf-8", extra="ignore"
    )

    LOG_LEVEL: str = "INFO"

    # Upstream services
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    OSRM_URL: str = "https://router.project-osrm.org"
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    USER_AGENT: str = "SafeRoute/1.0 (contact@saferoute.app)"

    # Geocoding is restricted to one country
    COUNTRY_CODE: str = "in"
    COUNTRY_NAME: str = "India"

    # Timeouts in seconds
    GEOCODE_TIMEOUT: float = 10.0
    ROUTE_TIMEOUT: float = 15.0
    POI_TIMEOUT: float = 18.0
    POI_DEADLINE: float = 20.0

    # Comma-separated list of allowed CORS origins
    CORS_ALLOW_ORIGINS: str = "http://localhost:5173,http://localhost:4173"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


settings = Settings()
