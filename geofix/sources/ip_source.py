from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from geofix.config import DEFAULT_IP_GEOLOCATION_URL
from geofix.errors import MalformedLocationError, MissingFieldError, NetworkError, PayloadParseError, RemoteError
from geofix.models.common import Fix
from geofix.models.response_models import IpLocation
from geofix.sources.base import BaseLocationSource


class IpInfoSource(BaseLocationSource):
    """Location source for the https://ipinfo.io JSON API.

    The service geolocates the caller's public IP address, so the request takes
    no parameters. Only the `loc` field ("lat,lon") of the payload is used.
    """

    name = "ip"

    def __init__(self, base_url: str = DEFAULT_IP_GEOLOCATION_URL, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds

    async def locate(self) -> Fix:
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(self._base_url)
        except httpx.RequestError as exc:
            raise NetworkError(f"Request to IP geolocation service failed: {repr(exc)}") from exc

        if not HTTPStatus.OK <= response.status_code < HTTPStatus.MULTIPLE_CHOICES:
            raise RemoteError(
                f"IP geolocation service returned HTTP {response.status_code}: {response.text}",
                response.status_code,
            )

        data = self._parse_json(response)
        try:
            ip_location = IpLocation.model_validate(data)
        except ValidationError as exc:
            raise PayloadParseError(f"Unexpected IP geolocation response: {exc}") from exc

        if ip_location.loc is None:
            raise MissingFieldError("IP geolocation response has no 'loc' field.")

        return self._parse_loc(ip_location.loc)

    @staticmethod
    def _parse_loc(loc: str) -> Fix:
        """Parse a "lat,lon" string such as "37.3860,-122.0838"."""
        parts = loc.split(",")
        if len(parts) != 2:
            raise MalformedLocationError(f"Expected 'lat,lon' location, got {loc!r}.")

        try:
            latitude = float(parts[0])
            longitude = float(parts[1])
        except ValueError as exc:
            raise PayloadParseError(f"Failed to parse coordinates from {loc!r}: {exc}") from exc

        return Fix(latitude=latitude, longitude=longitude)

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadParseError(f"Failed to decode IP geolocation response as JSON: {exc}") from exc
