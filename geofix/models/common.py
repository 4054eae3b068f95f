from pydantic import BaseModel, ConfigDict

# Latitude and longitude in micro-degrees (degrees * 1_000_000).
Coordinates = tuple[int, int]

MICRO_DEGREES_PER_DEGREE = 1_000_000


class Fix(BaseModel):
    """A single position observation from a location source, in float degrees.

    Every source returns this shape; the resolver turns the winning fix into
    a `Location` through the coordinate normalizer.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class Location(BaseModel):
    """Final resolved location in fixed-point micro-degrees."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    source: str

    @property
    def latitude(self) -> float:
        return self.coordinates[0] / MICRO_DEGREES_PER_DEGREE

    @property
    def longitude(self) -> float:
        return self.coordinates[1] / MICRO_DEGREES_PER_DEGREE
