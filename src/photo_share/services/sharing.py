"""End-to-end flow: create an album, upload a batch, assemble the result."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from photo_share.domain.errors import InvalidArgument
from photo_share.domain.models import Album
from photo_share.domain.uploads import BatchStats, UploadResult
from photo_share.services.albums import AlbumService
from photo_share.services.uploads import (
    BatchUploadScheduler,
    ProgressCallback,
    UploadSession,
)

_logger = logging.getLogger(__name__)


def default_album_name(now: datetime) -> str:
    """Name given to an album when the uploader leaves it blank."""
    return f"Album {now:%Y-%m-%d}"


class OutcomeKind(StrEnum):
    """Aggregate result of a batch shown to the uploader."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass(frozen=True)
class ShareOutcome:
    """Album plus the per-file results of the batch that filled it."""

    album: Album
    results: list[UploadResult]
    stats: BatchStats

    @property
    def kind(self) -> OutcomeKind:
        if self.stats.failed == 0 and self.stats.success > 0:
            return OutcomeKind.SUCCESS
        if self.stats.success == 0:
            return OutcomeKind.FAILURE
        return OutcomeKind.PARTIAL


@dataclass
class ShareService:
    """Creates a shareable album from a batch of selected files."""

    album_service: AlbumService
    scheduler: BatchUploadScheduler
    concurrency: int = 6
    max_retries: int = 3

    async def share(
        self,
        name: str | None,
        session: UploadSession,
        on_progress: ProgressCallback | None = None,
    ) -> ShareOutcome:
        """Upload every file in the session into a new album."""
        if not session.files:
            raise InvalidArgument("At least one file is required")
        album_name = (name or "").strip() or default_album_name(datetime.now(tz=UTC))
        album_id = self.album_service.create_album(album_name)
        results = await self.scheduler.run(
            session,
            album_id,
            concurrency=self.concurrency,
            max_retries=self.max_retries,
            on_progress=on_progress,
        )
        album = self.album_service.assemble(album_id, album_name, results)
        _logger.info(
            "Batch upload completed: album_id=%s photos=%s/%s",
            album_id,
            len(album.photos),
            session.stats.total,
        )
        return ShareOutcome(album=album, results=results, stats=session.stats)
