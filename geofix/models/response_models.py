from pydantic import BaseModel, ConfigDict

from geofix.models.common import Coordinates


class GoogleLocation(BaseModel):
    lat: float
    lng: float


class GoogleGeoResponse(BaseModel):
    """Response from the WiFi geolocation API.

    `accuracy` is decoded for schema compatibility only; it does not take part
    in source selection.
    """

    location: GoogleLocation
    accuracy: float


class IpLocation(BaseModel):
    """Response from the IP geolocation API; only `loc` ("lat,lon") is used."""

    model_config = ConfigDict(extra="ignore")

    loc: str | None = None


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class LocationResponse(BaseModel):
    """Response model for a resolved location."""

    source: str
    coordinates: Coordinates
    latitude: float
    longitude: float
