"""Runtime settings, overridable through DASH_NAV_* environment variables or a .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DASH_NAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str = "dash-nav/1.0"
    log_level: str = "INFO"

    nominatim_url: str = "https://nominatim.openstreetmap.org"
    osrm_url: str = "https://router.project-osrm.org"
    ip_location_url: str = "http://ip-api.com/json/"

    # Geocoder search bias
    home_country: str = "hu"
    language: str = "hu"
    result_limit: int = Field(default=5, ge=1, le=50)

    request_timeout_s: float = Field(default=8.0, gt=0)
    location_poll_interval_s: float = Field(default=30.0, gt=0)
    # ~100 m in degrees; smaller moves are treated as GPS noise
    jitter_threshold_deg: float = Field(default=0.001, ge=0)

    # Okány, used until the first live fix arrives
    fallback_lat: float = Field(default=46.8986701965332, ge=-90, le=90)
    fallback_lon: float = Field(default=21.346471786499023, ge=-180, le=180)
    fallback_place_name: str = "Okány"
    fallback_timezone: str = "Europe/Budapest"

    default_zoom: int = Field(default=13, ge=0, le=19)

    preview_http_port: int = Field(default=3333, gt=0, le=65535)
    preview_ws_port: int = Field(default=3334, gt=0, le=65535)


settings = Settings()
