import json
from collections.abc import Sequence
from typing import Any

from geofix.errors import MissingFieldError, PayloadParseError, SourceUnavailableError
from geofix.logger import logger
from geofix.models.common import Fix
from geofix.runner import BaseProcessRunner
from geofix.sources.base import BaseLocationSource

DEFAULT_GPS_COMMAND = ("gpspipe", "-w", "-n", "1")


class GpsSource(BaseLocationSource):
    """Location source backed by a local GPS feed.

    The command is expected to wait for data and print exactly one JSON
    position datum, e.g. `{"class": "TPV", "lat": 52.52, "lon": 13.405, ...}`.
    """

    name = "gps"

    def __init__(self, runner: BaseProcessRunner, command: Sequence[str] = DEFAULT_GPS_COMMAND) -> None:
        self._runner = runner
        self._command = list(command)

    async def locate(self) -> Fix:
        result = await self._runner.run(self._command)
        if not result.ok:
            raise SourceUnavailableError(f"GPS command exited with status {result.returncode}.")

        logger.debug(f"GPS data: {result.stdout!r}")

        data = self._parse_json(result.stdout)
        return Fix(
            latitude=self._extract_number(data, "lat"),
            longitude=self._extract_number(data, "lon"),
        )

    @staticmethod
    def _parse_json(text: str) -> dict[str, Any]:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise PayloadParseError(f"Failed to decode GPS output as JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise PayloadParseError(f"Expected a JSON object from the GPS feed, got {type(data).__name__}.")
        return data

    @staticmethod
    def _extract_number(data: dict[str, Any], key: str) -> float:
        value = data.get(key)
        # bool is an int subclass but never a coordinate.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MissingFieldError(f"GPS datum has no numeric {key!r} field.")
        return float(value)
