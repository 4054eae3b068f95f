from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from geofix.config import DEFAULT_WIFI_GEOLOCATION_URL
from geofix.errors import (
    AuthMissingError,
    NetworkError,
    NoAccessPointsFoundError,
    PayloadParseError,
    RemoteError,
    SourceUnavailableError,
)
from geofix.logger import logger
from geofix.models.common import Fix
from geofix.models.request_models import GeoRequest, WifiAccessPoint
from geofix.models.response_models import GoogleGeoResponse
from geofix.runner import BaseProcessRunner
from geofix.sources.base import BaseLocationSource

DEFAULT_WIFI_SCAN_COMMAND = ("nmcli", "-t", "-f", "SSID,BSSID,SIGNAL", "dev", "wifi")


def split_terse_fields(line: str) -> list[str]:
    """Split a terse nmcli line on field separators and unescape each field.

    nmcli escapes a literal colon as `\\:` and a literal backslash as `\\\\`.
    Escape pairs are consumed in one pass, so a field ending in a backslash
    (`Lab\\\\:...`) still ends at the following separator.
    """
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)
    for char in chars:
        if char == "\\":
            current.append(next(chars, "\\"))
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def parse_scan_line(line: str) -> WifiAccessPoint | None:
    """Parse one `SSID:BSSID:SIGNAL` line of a terse WiFi scan.

    The BSSID is everything between the first and the last field, joined back
    with colons, so both escaped (`AA\\:BB\\:...`) and plain (`AA:BB:...`)
    forms give the canonical uppercase MAC address. The scan tool reports a
    positive signal figure; it is stored as a negative RSSI value.

    Returns None for lines with fewer than three fields.
    """
    parts = split_terse_fields(line.strip())
    if len(parts) < 3:
        return None

    mac_address = ":".join(parts[1:-1]).upper()

    try:
        signal = int(parts[-1])
    except ValueError:
        signal = 0

    return WifiAccessPoint(mac_address=mac_address, signal_strength=-abs(signal))


def parse_scan_output(output: str) -> list[WifiAccessPoint]:
    """Parse full WiFi scan output, skipping lines that cannot be geolocated."""
    access_points = []
    for line in output.splitlines():
        access_point = parse_scan_line(line)
        if access_point is not None:
            access_points.append(access_point)
    return access_points


class WifiSource(BaseLocationSource):
    """Location source using visible WiFi access points.

    Scans for nearby networks with a local command, then submits the access
    points to a Google Geolocation API compatible service.
    """

    name = "wifi"

    def __init__(
        self,
        api_key: str,
        runner: BaseProcessRunner,
        base_url: str = DEFAULT_WIFI_GEOLOCATION_URL,
        scan_command: Sequence[str] = DEFAULT_WIFI_SCAN_COMMAND,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._api_key = api_key
        self._runner = runner
        self._base_url = base_url
        self._scan_command = list(scan_command)
        self._timeout_seconds = timeout_seconds

    async def locate(self) -> Fix:
        if not self._api_key:
            raise AuthMissingError("WiFi geolocation API key is not configured (GEO_API).")

        access_points = await self.scan()
        if not access_points:
            raise NoAccessPointsFoundError("No Wi-Fi networks found.")

        logger.debug(f"Submitting {len(access_points)} access points for WiFi geolocation")
        geo_request = GeoRequest(consider_ip=True, wifi_access_points=access_points)
        response = await self._request(geo_request)
        return Fix(latitude=response.location.lat, longitude=response.location.lng)

    async def scan(self) -> list[WifiAccessPoint]:
        """List visible access points using the configured scan command."""
        result = await self._runner.run(self._scan_command)
        if not result.ok:
            raise SourceUnavailableError(f"WiFi scan command exited with status {result.returncode}.")
        return parse_scan_output(result.stdout)

    async def _request(self, geo_request: GeoRequest) -> GoogleGeoResponse:
        """POST the access points and decode the geolocation response."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.post(
                    self._base_url,
                    params={"key": self._api_key},
                    json=geo_request.model_dump(by_alias=True),
                )
        except httpx.RequestError as exc:
            raise NetworkError(f"Request to WiFi geolocation service failed: {repr(exc)}") from exc

        self._handle_http_errors(response)

        data = self._parse_json(response)
        try:
            return GoogleGeoResponse.model_validate(data)
        except ValidationError as exc:
            raise PayloadParseError(f"Unexpected WiFi geolocation response: {exc}") from exc

    def _handle_http_errors(self, response: httpx.Response) -> None:
        """Map non-success HTTP statuses to RemoteError."""
        status_code = response.status_code

        if status_code == HTTPStatus.NOT_FOUND:
            # The API answers 404 "notFound" when the access points cannot be located.
            raise RemoteError("WiFi geolocation service could not locate the access points.", status_code)

        if status_code == HTTPStatus.TOO_MANY_REQUESTS:
            raise RemoteError("WiFi geolocation rate limit or quota exceeded (HTTP 429).", status_code)

        if status_code in (HTTPStatus.BAD_REQUEST, HTTPStatus.FORBIDDEN):
            # 400 keyInvalid / 403 accessNotConfigured or dailyLimitExceeded.
            raise RemoteError(
                f"WiFi geolocation service rejected the request (HTTP {status_code}): {response.text}",
                status_code,
            )

        if not HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
            raise RemoteError(f"WiFi geolocation service returned HTTP {status_code}: {response.text}", status_code)

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadParseError(f"Failed to decode WiFi geolocation response as JSON: {exc}") from exc
