from abc import ABC, abstractmethod

from geofix.models.common import Fix


class BaseLocationSource(ABC):
    """Abstract base for all location sources.

    Concrete implementations (GPS feed, WiFi fingerprint, public IP) acquire a
    single fix from their provider and map the provider-specific output into a
    normalized `Fix`. Any failure is raised as a LocationSourceError subclass.
    """

    name: str

    @abstractmethod
    async def locate(self) -> Fix:
        """Acquire one fix from this source."""
        raise NotImplementedError
