"""Application configuration via Pydantic Settings.

Environment variable names are mapped explicitly (GEO_API, GPS_COMMAND, ...) and
may also be provided through a local `.env` file. Settings are loaded once via
`get_settings()` and are read-only afterwards.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WIFI_GEOLOCATION_URL = "https://www.googleapis.com/geolocation/v1/geolocate"
DEFAULT_IP_GEOLOCATION_URL = "https://ipinfo.io/json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # WiFi geolocation
    geo_api_key: str = Field(default="", validation_alias="GEO_API")
    wifi_geolocation_url: str = Field(
        default=DEFAULT_WIFI_GEOLOCATION_URL,
        validation_alias="WIFI_GEOLOCATION_URL",
    )

    # IP geolocation
    ip_geolocation_url: str = Field(default=DEFAULT_IP_GEOLOCATION_URL, validation_alias="IP_GEOLOCATION_URL")

    # Local commands
    gps_command: list[str] = Field(
        default=["gpspipe", "-w", "-n", "1"],
        validation_alias="GPS_COMMAND",
    )
    wifi_scan_command: list[str] = Field(
        default=["nmcli", "-t", "-f", "SSID,BSSID,SIGNAL", "dev", "wifi"],
        validation_alias="WIFI_SCAN_COMMAND",
    )

    # Timeouts
    command_timeout_seconds: float = Field(default=10.0, validation_alias="COMMAND_TIMEOUT_SECONDS")
    http_timeout_seconds: float = Field(default=5.0, validation_alias="HTTP_TIMEOUT_SECONDS")

    # App
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
