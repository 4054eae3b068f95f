import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from geofix.errors import SourceUnavailableError
from geofix.logger import logger


@dataclass(frozen=True)
class ProcessResult:
    """Captured output of a finished external command."""

    stdout: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class BaseProcessRunner(ABC):
    """Abstract capability for running an external command.

    Sources depend on this interface rather than on `asyncio.subprocess`
    directly, so tests can substitute a fake runner for real system commands.
    """

    @abstractmethod
    async def run(self, args: Sequence[str]) -> ProcessResult:
        """Run `args` and return its captured stdout and exit status.

        Raises SourceUnavailableError if the command cannot be launched.
        """
        raise NotImplementedError


class AsyncProcessRunner(BaseProcessRunner):
    """Runs commands with `asyncio.create_subprocess_exec`.

    The child process is killed if the timeout expires or the awaiting task is
    cancelled.
    """

    def __init__(self, timeout_seconds: float | None = 10.0) -> None:
        self._timeout_seconds = timeout_seconds

    async def run(self, args: Sequence[str]) -> ProcessResult:
        if not args:
            raise SourceUnavailableError("No command configured.")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise SourceUnavailableError(f"Failed to launch {args[0]!r}: {repr(exc)}") from exc

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            await self._kill(process)
            raise SourceUnavailableError(
                f"Command {args[0]!r} did not finish within {self._timeout_seconds} seconds."
            ) from exc
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        return ProcessResult(
            stdout=stdout.decode("utf-8", errors="replace"),
            returncode=process.returncode if process.returncode is not None else -1,
        )

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()
        logger.debug(f"Killed child process pid={process.pid}")
