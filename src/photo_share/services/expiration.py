"""Expiration sweep, empty-album reclaim and administrative album deletion."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from photo_share.domain.cleanup import ForceDeleteResult, SweepReport, SweepState
from photo_share.domain.errors import Internal, InvalidArgument
from photo_share.domain.models import Photo
from photo_share.services.albums import AlbumRepository, PhotoRepository
from photo_share.services.cleanup import PhotoCleanupService

_logger = logging.getLogger(__name__)


@dataclass
class EmptyAlbumReclaimer:
    """Deletes albums that no photo references any more.

    Albums younger than ``grace`` are left alone: a new album stays empty
    until its batch upload finishes and the photos are saved.

    Counts photos per album one query at a time; a photo-count-per-album
    index would replace this if album counts grow large.
    """

    album_repository: AlbumRepository
    photo_repository: PhotoRepository
    grace: timedelta = timedelta(hours=24)

    def reclaim(self, now: datetime | None = None) -> list[str]:
        """Delete every empty album past the grace window and return the ids."""
        cutoff = (now or datetime.now(tz=UTC)) - self.grace
        deleted: list[str] = []
        try:
            albums = self.album_repository.list_albums()
        except Exception:
            _logger.exception("Cleanup error: failed to list albums")
            return deleted
        for album in albums:
            if album.created_at > cutoff:
                continue
            try:
                if self.photo_repository.count_album_photos(album.id) > 0:
                    continue
                self.album_repository.delete_album(album.id)
            except Exception:
                _logger.exception("Failed to reclaim album: album_id=%s", album.id)
                continue
            deleted.append(album.id)
            _logger.info("Deleted empty album: %s", album.id)
        _logger.info("Deleted %s empty albums", len(deleted))
        return deleted

    async def run(self, now: datetime | None = None) -> list[str]:
        """Scheduler entrypoint."""
        return await asyncio.to_thread(self.reclaim, now)


@dataclass
class ExpirationSweeper:
    """Finds photos past their retention window and deletes them."""

    photo_repository: PhotoRepository
    cleanup: PhotoCleanupService
    reclaimer: EmptyAlbumReclaimer
    state: SweepState = field(default=SweepState.IDLE, init=False)

    async def sweep(self, now: datetime | None = None) -> SweepReport:
        """Run one sweep pass: scan, delete, then reclaim empty albums."""
        moment = now or datetime.now(tz=UTC)
        self.state = SweepState.SCANNING
        try:
            expired = await asyncio.to_thread(
                self.photo_repository.list_expired_photos, moment
            )
            _logger.info("Found %s expired photos", len(expired))
            if not expired:
                return SweepReport()
            self.state = SweepState.DELETING
            outcomes = await asyncio.gather(
                *(self.cleanup.delete_photo(photo) for photo in expired),
                return_exceptions=True,
            )
            deleted, payload_failures, metadata_failures = _tally(expired, outcomes)
            _logger.info(
                "Processed %s expired photos: deleted=%s payload_failures=%s",
                len(expired),
                deleted,
                payload_failures,
            )
            reclaimed = await self.reclaimer.run(moment)
            return SweepReport(
                expired=len(expired),
                deleted=deleted,
                payload_failures=payload_failures,
                metadata_failures=metadata_failures,
                reclaimed_albums=reclaimed,
            )
        finally:
            self.state = SweepState.IDLE


def _tally(
    photos: list[Photo], outcomes: list[bool | BaseException]
) -> tuple[int, int, int]:
    deleted = payload_failures = metadata_failures = 0
    for photo, outcome in zip(photos, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            metadata_failures += 1
            _logger.error(
                "Failed to delete photo metadata: photo_id=%s error=%s",
                photo.id,
                outcome,
            )
            continue
        deleted += 1
        if not outcome:
            payload_failures += 1
    return deleted, payload_failures, metadata_failures


@dataclass
class AlbumPurgeService:
    """Privileged, irreversible deletion of an album and all its photos."""

    album_repository: AlbumRepository
    photo_repository: PhotoRepository
    cleanup: PhotoCleanupService

    async def force_delete_album(self, album_id: str | None) -> ForceDeleteResult:
        """Delete every photo of the album, then the album itself."""
        if not album_id or not album_id.strip():
            raise InvalidArgument("Album ID is required")
        try:
            photos = await asyncio.to_thread(
                self.photo_repository.list_album_photos, album_id
            )
            outcomes = await asyncio.gather(
                *(self.cleanup.delete_photo(photo) for photo in photos),
                return_exceptions=True,
            )
            _tally(photos, outcomes)
            await asyncio.to_thread(self.album_repository.delete_album, album_id)
        except Exception as exc:
            _logger.exception("Force delete error: album_id=%s", album_id)
            raise Internal("Delete failed") from exc
        _logger.info(
            "Force deleted album: album_id=%s photos=%s", album_id, len(photos)
        )
        return ForceDeleteResult(success=True, deleted_photos=len(photos))
