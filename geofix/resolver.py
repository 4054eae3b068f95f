from collections.abc import Sequence

from geofix.config import Settings
from geofix.errors import LocationUnavailableError
from geofix.logger import logger
from geofix.models.common import Location
from geofix.normalizer import to_micro_degrees
from geofix.runner import AsyncProcessRunner
from geofix.sources.base import BaseLocationSource
from geofix.sources.gps_source import GpsSource
from geofix.sources.ip_source import IpInfoSource
from geofix.sources.wifi_source import WifiSource


class LocationResolver:
    """Resolves the current location by trying sources in priority order.

    Sources are awaited strictly one after another; the first one that yields a
    fix wins and the remaining sources are never called. A failing source is
    logged and the next one is tried. When every source has failed, a single
    LocationUnavailableError is raised carrying the individual causes.
    """

    def __init__(self, sources: Sequence[BaseLocationSource]) -> None:
        self._sources = list(sources)

    @property
    def sources(self) -> list[BaseLocationSource]:
        return list(self._sources)

    async def resolve(self) -> Location:
        causes: list[tuple[str, Exception]] = []

        for index, source in enumerate(self._sources):
            try:
                fix = await source.locate()
                coordinates = to_micro_degrees(fix.latitude, fix.longitude)
            except Exception as exc:
                causes.append((source.name, exc))
                next_source = self._sources[index + 1].name if index + 1 < len(self._sources) else None
                if next_source:
                    logger.info(
                        f"Failed to get {source.name} location: {exc!r}. Falling back to {next_source} location."
                    )
                else:
                    logger.info(f"Failed to get {source.name} location: {exc!r}. No sources left.")
                continue

            logger.info(f"Resolved location source={source.name} coordinates={coordinates}")
            return Location(coordinates=coordinates, source=source.name)

        summary = ", ".join(f"{name}={exc!r}" for name, exc in causes)
        logger.error(f"Failed to get location from any source: {summary}")
        raise LocationUnavailableError(causes=causes)


def build_default_resolver(settings: Settings) -> LocationResolver:
    """Build the GPS -> WiFi -> IP resolver from application settings."""
    runner = AsyncProcessRunner(timeout_seconds=settings.command_timeout_seconds)
    return LocationResolver(
        [
            GpsSource(runner=runner, command=settings.gps_command),
            WifiSource(
                api_key=settings.geo_api_key,
                runner=runner,
                base_url=settings.wifi_geolocation_url,
                scan_command=settings.wifi_scan_command,
                timeout_seconds=settings.http_timeout_seconds,
            ),
            IpInfoSource(
                base_url=settings.ip_geolocation_url,
                timeout_seconds=settings.http_timeout_seconds,
            ),
        ]
    )
