"""Photo deletion with payload cleanup."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from photo_share.domain.models import Photo
from photo_share.services.albums import PhotoRepository

_logger = logging.getLogger(__name__)


class BlobStorage(Protocol):
    """Interface for the binary payload store."""

    def delete(self, file_path: str) -> None:
        """Delete an object; deleting a missing object is a no-op."""


@dataclass
class PhotoCleanupService:
    """Deletes photo records and keeps their payloads from lingering.

    Payload failures are logged and swallowed: an orphaned blob can be found
    later, a failed metadata delete cannot.
    """

    photo_repository: PhotoRepository
    storage: BlobStorage

    def delete_payload(self, photo: Photo) -> bool:
        """Delete the photo's blob, returning False if that failed."""
        try:
            self.storage.delete(photo.file_path)
        except Exception as exc:
            _logger.warning("Failed to delete file %s: %s", photo.file_path, exc)
            return False
        return True

    async def on_photo_deleted(self, photo: Photo) -> bool:
        """Hook run after any photo metadata record is removed."""
        deleted = await asyncio.to_thread(self.delete_payload, photo)
        if deleted:
            _logger.info("Deleted file: %s", photo.file_path)
        return deleted

    async def delete_photo(self, photo: Photo) -> bool:
        """Delete payload and metadata concurrently.

        Returns whether the payload deletion succeeded. Metadata failures
        propagate. The delete hook only re-attempts the payload when the
        first attempt failed.
        """
        payload_deleted, _ = await asyncio.gather(
            asyncio.to_thread(self.delete_payload, photo),
            asyncio.to_thread(self.photo_repository.delete_photo, photo.id),
        )
        if not payload_deleted:
            payload_deleted = await self.on_photo_deleted(photo)
        return payload_deleted

    async def remove_photo(self, photo_id: str) -> Photo | None:
        """Remove a photo record directly and fire the delete hook.

        Removing a photo that is already gone is a no-op.
        """
        photo = self.photo_repository.get_photo(photo_id)
        if photo is None:
            return None
        self.photo_repository.delete_photo(photo_id)
        await self.on_photo_deleted(photo)
        return photo
