import asyncio
import sys

from geofix.config import get_settings
from geofix.errors import LocationUnavailableError
from geofix.resolver import LocationResolver, build_default_resolver


async def _locate(resolver: LocationResolver) -> int:
    try:
        location = await resolver.resolve()
    except LocationUnavailableError as exc:
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    print(f"Got location: {location!r}")  # noqa: T201
    return 0


def main(resolver: LocationResolver | None = None) -> int:
    """Resolve the location once and report it; exit status 1 on failure."""
    return asyncio.run(_locate(resolver or build_default_resolver(get_settings())))


if __name__ == "__main__":
    sys.exit(main())
