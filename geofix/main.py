from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status

from geofix.config import get_settings
from geofix.errors import LocationUnavailableError
from geofix.exception_handlers import unhandled_exception_handler
from geofix.logger import logger
from geofix.models.response_models import HealthResponse, LocationResponse
from geofix.resolver import LocationResolver, build_default_resolver

app = FastAPI(
    title="Location Resolver Service",
    version="0.1.0",
    description="Resolves the device location from GPS, WiFi fingerprint, or public IP, in that order.",
)
logger.info("Started Location Resolver Service")


def get_location_resolver() -> LocationResolver:
    """Dependency to provide a GPS -> WiFi -> IP LocationResolver instance."""
    return build_default_resolver(get_settings())


app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/location",
    response_model=LocationResponse,
    status_code=status.HTTP_200_OK,
    tags=["location"],
    summary="Resolve the current location of this device.",
)
async def get_location(
    request: Request,
    resolver: Annotated[LocationResolver, Depends(get_location_resolver)],
) -> LocationResponse:
    """Resolve the device location.

    Sources are tried in order (GPS, WiFi fingerprint, public IP) and the first
    fix wins. Coordinates are returned both as micro-degrees and as degrees.
    """
    logger.info(f"Resolving location path={request.url.path} method={request.method}")
    try:
        location = await resolver.resolve()
    except LocationUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "code": "location_unavailable",
                "message": str(exc),
            },
        ) from exc

    return LocationResponse(
        source=location.source,
        coordinates=location.coordinates,
        latitude=location.latitude,
        longitude=location.longitude,
    )
