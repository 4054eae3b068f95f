class AppError(Exception):
    """Base application error for the location resolver."""


class LocationSourceError(AppError):
    """Base error for a single location source failing to produce a fix."""


class SourceUnavailableError(LocationSourceError):
    """Raised when an external command cannot be launched, times out, or exits non-zero."""


class PayloadParseError(LocationSourceError):
    """Raised when command output or a response body cannot be decoded."""


class MissingFieldError(LocationSourceError):
    """Raised when a required field is absent from a decoded payload."""


class MalformedLocationError(LocationSourceError):
    """Raised when a "lat,lon" location string does not have exactly two parts."""


class NoAccessPointsFoundError(LocationSourceError):
    """Raised when a WiFi scan yields no usable access points."""


class AuthMissingError(LocationSourceError):
    """Raised when the WiFi geolocation API key is not configured."""


class NetworkError(LocationSourceError):
    """Raised when the request to a geolocation service fails in transport."""


class RemoteError(LocationSourceError):
    """Raised when a geolocation service answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidCoordinatesError(AppError, ValueError):
    """Raised when degrees are NaN, infinite, or outside the latitude/longitude range."""


class LocationUnavailableError(AppError):
    """Raised when every location source has failed.

    The message stays generic; the per-source failures are kept on `causes`
    as (source name, exception) pairs for logging and diagnostics.
    """

    def __init__(
        self,
        message: str = "Failed to get location",
        causes: list[tuple[str, Exception]] | None = None,
    ) -> None:
        super().__init__(message)
        self.causes = causes or []
