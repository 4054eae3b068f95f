import logging
from collections.abc import Callable, Sequence
from http import HTTPStatus
from typing import Any

import httpx

from geofix.errors import LocationSourceError, SourceUnavailableError
from geofix.models.common import Fix
from geofix.runner import BaseProcessRunner, ProcessResult
from geofix.sources.base import BaseLocationSource


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text

    def json(self) -> Any:
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Every request is recorded in `calls` as (method, url, kwargs).
    """

    def __init__(self, response: MockResponse, calls: list[tuple[str, str, dict[str, Any]]] | None = None) -> None:
        self._response = response
        self.calls = calls if calls is not None else []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any) -> MockResponse:
        self.calls.append(("GET", url, kwargs))
        return self._response

    async def post(self, url: str, **kwargs: Any) -> MockResponse:
        self.calls.append(("POST", url, kwargs))
        return self._response


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure.

    The target URL is provided at construction time, so tests for different services
    can reuse this implementation with different base URLs.
    """

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.RequestError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, **kwargs: Any) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})

    async def post(self, url: str, **kwargs: Any) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})


def make_fake_async_client(
    response: MockResponse,
    calls: list[tuple[str, str, dict[str, Any]]] | None = None,
) -> Callable[..., MockAsyncClient]:
    """Factory for a fake httpx.AsyncClient returning a fixed response.

    Pass a shared `calls` list to assert on the requests that were issued.
    """

    def _fake_client(*args: Any, **kwargs: Any) -> MockAsyncClient:
        return MockAsyncClient(response, calls)

    return _fake_client


class FakeProcessRunner(BaseProcessRunner):
    """Process runner returning canned output instead of running a command."""

    def __init__(self, stdout: str = "", returncode: int = 0, exc: Exception | None = None) -> None:
        self._result = ProcessResult(stdout=stdout, returncode=returncode)
        self._exc = exc
        self.calls: list[list[str]] = []

    async def run(self, args: Sequence[str]) -> ProcessResult:
        self.calls.append(list(args))
        if self._exc is not None:
            raise self._exc
        return self._result


class StubSource(BaseLocationSource):
    """Location source test double that returns a fixed fix or raises."""

    def __init__(self, name: str, fix: Fix | None = None, exc: Exception | None = None) -> None:
        self.name = name
        self._fix = fix
        self._exc = exc
        self.calls = 0

    async def locate(self) -> Fix:
        self.calls += 1
        if self._exc is not None:
            raise self._exc
        if self._fix is None:
            raise LocationSourceError(f"{self.name} has no fix")
        return self._fix


def unavailable(name: str) -> StubSource:
    """A stub source that always fails with SourceUnavailableError."""
    return StubSource(name, exc=SourceUnavailableError(f"{name} unavailable"))


class RecordingHandler(logging.Handler):
    """Keeps every record emitted through the logger it is attached to."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: int | None = None) -> list[str]:
        return [record.getMessage() for record in self.records if level is None or record.levelno == level]
