"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from photo_share.domain.models import Photo, PhotoDraft
from photo_share.services.albums import PhotoRepository

_PHOTO_COLUMNS = (
    "id,file_name,download_url,file_path,album_id,upload_time,delete_at,file_size"
)


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: Client

    def save_photo(self, draft: PhotoDraft) -> str:
        """Create a photo metadata row and return its id."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "file_name": draft.file_name,
                    "download_url": draft.download_url,
                    "file_path": draft.file_path,
                    "album_id": draft.album_id,
                    "upload_time": draft.upload_time.isoformat(),
                    "delete_at": draft.delete_at.isoformat(),
                    "file_size": draft.file_size,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo metadata")
        return str(response.data[0]["id"])

    def get_photo(self, photo_id: str) -> Photo | None:
        response = (
            self.client.table("photos")
            .select(_PHOTO_COLUMNS)
            .eq("id", photo_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_photo(response.data[0])

    def list_album_photos(self, album_id: str) -> list[Photo]:
        """Return an album's photos, newest upload first."""
        response = (
            self.client.table("photos")
            .select(_PHOTO_COLUMNS)
            .eq("album_id", album_id)
            .order("upload_time", desc=True)
            .execute()
        )
        return [_to_photo(row) for row in response.data or []]

    def count_album_photos(self, album_id: str) -> int:
        response = (
            self.client.table("photos")
            .select("id", count="exact")
            .eq("album_id", album_id)
            .limit(1)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def list_expired_photos(self, now: datetime) -> list[Photo]:
        """Return photos whose retention window has passed."""
        response = (
            self.client.table("photos")
            .select(_PHOTO_COLUMNS)
            .lte("delete_at", now.isoformat())
            .execute()
        )
        return [_to_photo(row) for row in response.data or []]

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo metadata row."""
        self.client.table("photos").delete().eq("id", photo_id).execute()


def _to_photo(row: dict[str, object]) -> Photo:
    return Photo(
        id=str(row["id"]),
        file_name=str(row["file_name"]),
        download_url=str(row["download_url"]),
        file_path=str(row["file_path"]),
        album_id=str(row["album_id"]),
        upload_time=datetime.fromisoformat(str(row["upload_time"])),
        delete_at=datetime.fromisoformat(str(row["delete_at"])),
        file_size=int(row.get("file_size") or 0),
    )
