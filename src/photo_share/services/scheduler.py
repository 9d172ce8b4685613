"""Fixed-interval background jobs."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class PeriodicJob:
    """Runs an async action every ``interval_seconds``.

    Runs are sequential, so one job never overlaps itself. A failing run is
    logged and the loop keeps going.
    """

    name: str
    interval_seconds: float
    action: Callable[[], Awaitable[object]]
    runs: int = field(default=0, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    async def run_once(self) -> object | None:
        """Execute the action a single time, logging any failure."""
        self.runs += 1
        try:
            return await self.action()
        except Exception:
            _logger.exception("Scheduled job failed: job=%s", self.name)
            return None

    async def run_forever(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()

    def start(self) -> None:
        """Start the job on the running event loop."""
        if self._task is None or self._task.done():
            _logger.info(
                "Scheduling job: job=%s interval=%ss", self.name, self.interval_seconds
            )
            self._task = asyncio.create_task(self.run_forever(), name=self.name)

    async def stop(self) -> None:
        """Cancel the job and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
