"""Album creation, photo persistence and album assembly."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from photo_share.config import build_share_link
from photo_share.domain.errors import InvalidArgument, NotFound
from photo_share.domain.models import Album, AlbumRecord, Photo, PhotoDraft
from photo_share.domain.uploads import UploadResult

_logger = logging.getLogger(__name__)


class AlbumRepository(Protocol):
    """Persistence interface for album metadata."""

    def create_album(self, name: str, created_at: datetime) -> str:
        """Create an album row and return its id."""

    def set_share_link(self, album_id: str, share_link: str) -> None:
        """Store the share link on an album."""

    def get_album(self, album_id: str) -> AlbumRecord | None:
        """Return an album row by id, if present."""

    def list_albums(self) -> list[AlbumRecord]:
        """Return all albums, newest first."""

    def increment_views(self, album_id: str) -> int:
        """Increment the album view counter and return the new value."""

    def delete_album(self, album_id: str) -> None:
        """Delete an album row; deleting a missing row is a no-op."""


class PhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    def save_photo(self, draft: PhotoDraft) -> str:
        """Persist a photo record and return its id."""

    def get_photo(self, photo_id: str) -> Photo | None:
        """Return a photo by id, if present."""

    def list_album_photos(self, album_id: str) -> list[Photo]:
        """Return an album's photos, newest upload first."""

    def count_album_photos(self, album_id: str) -> int:
        """Return how many photos reference the album."""

    def list_expired_photos(self, now: datetime) -> list[Photo]:
        """Return photos whose ``delete_at`` is at or before ``now``."""

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo row; deleting a missing row is a no-op."""


@dataclass
class AlbumService:
    """Creates albums and turns upload results into persisted photos."""

    album_repository: AlbumRepository
    photo_repository: PhotoRepository
    serving_origin: str
    upload_folder: str = "photo-share-albums"
    retention: timedelta = timedelta(hours=24)

    def create_album(self, name: str) -> str:
        """Create an album with its share link and return the id."""
        cleaned = name.strip()
        if not cleaned:
            raise InvalidArgument("Album name is required")
        album_id = self.album_repository.create_album(
            cleaned, created_at=datetime.now(tz=UTC)
        )
        self.album_repository.set_share_link(
            album_id, build_share_link(self.serving_origin, album_id)
        )
        _logger.info("Album created: album_id=%s", album_id)
        return album_id

    def save_photo(self, draft: PhotoDraft) -> str:
        """Persist one photo record."""
        if not draft.album_id:
            raise InvalidArgument("Album ID is required")
        if self.album_repository.get_album(draft.album_id) is None:
            raise NotFound(f"Album {draft.album_id} not found")
        if draft.delete_at <= draft.upload_time:
            raise InvalidArgument("delete_at must be later than upload_time")
        return self.photo_repository.save_photo(draft)

    def build_draft(
        self, album_id: str, result: UploadResult, now: datetime
    ) -> PhotoDraft:
        """Build the metadata record for a successful upload."""
        return PhotoDraft(
            file_name=result.file.name,
            download_url=result.url or "",
            file_path=f"{self.upload_folder}/{album_id}/{result.file.name}",
            album_id=album_id,
            upload_time=now,
            delete_at=now + self.retention,
            file_size=result.file.size,
        )

    def assemble(
        self, album_id: str, name: str, results: list[UploadResult]
    ) -> Album:
        """Persist successful uploads and return the in-memory album.

        Photos whose metadata cannot be saved are logged and left out; the
        rest of the album is still returned.
        """
        photos: list[Photo] = []
        for result in results:
            if not result.ok or not result.url:
                continue
            draft = self.build_draft(album_id, result, datetime.now(tz=UTC))
            try:
                photo_id = self.save_photo(draft)
            except Exception:
                _logger.exception(
                    "Failed to save photo metadata: album_id=%s file=%s",
                    album_id,
                    draft.file_name,
                )
                continue
            photos.append(Photo.from_draft(photo_id, draft))
        return Album(
            id=album_id,
            name=name,
            share_link=build_share_link(self.serving_origin, album_id),
            created_at=datetime.now(tz=UTC),
            views=0,
            photos=photos,
        )

    def get_photos(self, album_id: str) -> list[Photo]:
        """Return an album's photos, newest upload first."""
        if not album_id:
            raise InvalidArgument("Album ID is required")
        return self.photo_repository.list_album_photos(album_id)

    def get_album(self, album_id: str) -> Album | None:
        """Return an album with its photos, if it exists."""
        if not album_id:
            raise InvalidArgument("Album ID is required")
        record = self.album_repository.get_album(album_id)
        if record is None:
            return None
        return Album.from_record(
            record, self.photo_repository.list_album_photos(album_id)
        )

    def list_albums(self) -> list[Album]:
        """Return every album with its photos, newest first."""
        return [
            Album.from_record(
                record, self.photo_repository.list_album_photos(record.id)
            )
            for record in self.album_repository.list_albums()
        ]

    def increment_views(self, album_id: str) -> int:
        """Count one view of an album."""
        if not album_id:
            raise InvalidArgument("Album ID is required")
        if self.album_repository.get_album(album_id) is None:
            raise NotFound(f"Album {album_id} not found")
        return self.album_repository.increment_views(album_id)
