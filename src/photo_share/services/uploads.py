"""Batch upload engine with a bounded worker pool."""

import asyncio
import logging
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from photo_share.config import clamp_concurrency
from photo_share.domain.uploads import (
    BatchStats,
    SelectedFile,
    UploadProgress,
    UploadResult,
    UploadStatus,
)
from photo_share.services.retry import RetryPolicy

_logger = logging.getLogger(__name__)

UPLOADING_PROGRESS = 20
COMPLETED_PROGRESS = 100

ProgressCallback = Callable[[BatchStats], None]


class UploadClient(Protocol):
    """Interface for pushing one file to the remote endpoint."""

    async def upload(self, file: SelectedFile, album_id: str) -> str:
        """Upload the file and return its resolved URL."""


class UploadSession:
    """Interactive state for one batch: pending queue, progress and pause flag.

    The pending queue is the only structure workers contend on; every pop and
    removal goes through ``_lock``. Pause is cooperative: it stops new
    dequeues but never interrupts an upload that is already in flight.
    """

    def __init__(self, files: Sequence[SelectedFile]) -> None:
        self.files = list(files)
        self.progress: dict[str, UploadProgress] = {
            item.id: UploadProgress(file_id=item.id, file_name=item.name)
            for item in self.files
        }
        self.stats = BatchStats(total=len(self.files))
        self._pending: deque[SelectedFile] = deque(self.files)
        self._started: set[str] = set()
        self._lock = asyncio.Lock()
        self._resumed = asyncio.Event()
        self._resumed.set()

    @classmethod
    def select(cls, files: Sequence[SelectedFile]) -> "UploadSession":
        return cls(files)

    @property
    def paused(self) -> bool:
        return not self._resumed.is_set()

    def pause(self) -> None:
        """Stop workers from taking new files."""
        self._resumed.clear()

    def resume(self) -> None:
        """Let parked workers continue draining the queue."""
        self._resumed.set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def total_progress(self) -> float:
        """Mean of all per-file progress values."""
        if not self.progress:
            return 0.0
        return sum(item.progress for item in self.progress.values()) / len(
            self.progress
        )

    async def remove(self, file_id: str) -> bool:
        """Drop a file that has not started uploading yet."""
        async with self._lock:
            if file_id in self._started:
                return False
            for item in self._pending:
                if item.id == file_id:
                    self._pending.remove(item)
                    break
            else:
                return False
            self.files = [item for item in self.files if item.id != file_id]
            self.progress.pop(file_id, None)
            self.stats = BatchStats(
                done=self.stats.done,
                success=self.stats.success,
                failed=self.stats.failed,
                total=self.stats.total - 1,
            )
            return True

    async def next_file(self) -> SelectedFile | None:
        """Pop the next pending file, waiting while paused; None when drained."""
        while True:
            async with self._lock:
                if not self._pending:
                    return None
                if self._resumed.is_set():
                    selected = self._pending.popleft()
                    self._started.add(selected.id)
                    return selected
            await self._resumed.wait()

    def mark(
        self, file_id: str, status: UploadStatus, progress: int | None = None
    ) -> None:
        entry = self.progress.get(file_id)
        if entry is None:
            return
        entry.status = status
        if progress is not None:
            entry.progress = progress

    def record(self, ok: bool) -> BatchStats:
        """Apply one finished file to the counters and return the snapshot."""
        self.stats = BatchStats(
            done=self.stats.done + 1,
            success=self.stats.success + (1 if ok else 0),
            failed=self.stats.failed + (0 if ok else 1),
            total=self.stats.total,
        )
        return self.stats


@dataclass
class BatchUploadScheduler:
    """Drains an upload session through a bounded pool of workers."""

    client: UploadClient
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    worker_delay: float = 0.2

    async def run(
        self,
        session: UploadSession,
        album_id: str,
        concurrency: int | None = None,
        max_retries: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[UploadResult]:
        """Upload every pending file and return one result per file."""
        workers = clamp_concurrency(concurrency)
        results: list[UploadResult] = []
        _logger.info(
            "Batch upload start: album_id=%s files=%s workers=%s",
            album_id,
            session.pending_count,
            workers,
        )
        await asyncio.gather(
            *(
                self._worker(session, album_id, max_retries, results, on_progress)
                for _ in range(workers)
            )
        )
        _logger.info(
            "Batch upload done: album_id=%s success=%s failed=%s",
            album_id,
            session.stats.success,
            session.stats.failed,
        )
        return results

    async def _worker(  # noqa: PLR0913
        self,
        session: UploadSession,
        album_id: str,
        max_retries: int | None,
        results: list[UploadResult],
        on_progress: ProgressCallback | None,
    ) -> None:
        while True:
            selected = await session.next_file()
            if selected is None:
                return
            session.mark(selected.id, UploadStatus.UPLOADING, UPLOADING_PROGRESS)
            try:
                url = await self.retry_policy.execute(
                    lambda item=selected: self.client.upload(item, album_id),
                    max_attempts=max_retries,
                )
            except Exception as exc:
                _logger.warning(
                    "Upload failed: file=%s album_id=%s error=%s",
                    selected.name,
                    album_id,
                    exc,
                )
                results.append(
                    UploadResult(file=selected, ok=False, error=str(exc) or repr(exc))
                )
                session.mark(selected.id, UploadStatus.ERROR)
                snapshot = session.record(ok=False)
            else:
                results.append(UploadResult(file=selected, ok=True, url=url))
                session.mark(selected.id, UploadStatus.COMPLETED, COMPLETED_PROGRESS)
                snapshot = session.record(ok=True)
            if on_progress is not None:
                try:
                    on_progress(snapshot)
                except Exception:
                    _logger.exception(
                        "Progress callback failed: album_id=%s", album_id
                    )
            await asyncio.sleep(self.worker_delay)
