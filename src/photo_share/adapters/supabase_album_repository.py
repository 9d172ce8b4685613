"""Supabase-backed album repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from photo_share.domain.models import AlbumRecord
from photo_share.services.albums import AlbumRepository


@dataclass
class SupabaseAlbumRepository(AlbumRepository):
    """Supabase implementation for album metadata persistence."""

    client: Client

    def create_album(self, name: str, created_at: datetime) -> str:
        """Create an album row and return its id."""
        response = (
            self.client.table("albums")
            .insert({"name": name, "created_at": created_at.isoformat(), "views": 0})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create album")
        return str(response.data[0]["id"])

    def set_share_link(self, album_id: str, share_link: str) -> None:
        self.client.table("albums").update({"share_link": share_link}).eq(
            "id", album_id
        ).execute()

    def get_album(self, album_id: str) -> AlbumRecord | None:
        """Fetch an album row by id."""
        response = (
            self.client.table("albums")
            .select("id,name,share_link,created_at,views")
            .eq("id", album_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def list_albums(self) -> list[AlbumRecord]:
        """Return all albums, newest first."""
        response = (
            self.client.table("albums")
            .select("id,name,share_link,created_at,views")
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def increment_views(self, album_id: str) -> int:
        """Read-modify-write increment of the view counter."""
        record = self.get_album(album_id)
        if record is None:
            return 0
        views = record.views + 1
        self.client.table("albums").update({"views": views}).eq(
            "id", album_id
        ).execute()
        return views

    def delete_album(self, album_id: str) -> None:
        """Delete an album row."""
        self.client.table("albums").delete().eq("id", album_id).execute()


def _to_record(row: dict[str, object]) -> AlbumRecord:
    return AlbumRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        share_link=str(row.get("share_link") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        views=int(row.get("views") or 0),
    )
