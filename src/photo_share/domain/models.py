"""Domain models for albums and photos."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PhotoDraft:
    """Photo metadata before the store assigns an id."""

    file_name: str
    download_url: str
    file_path: str
    album_id: str
    upload_time: datetime
    delete_at: datetime
    file_size: int


@dataclass(frozen=True)
class Photo:
    """A persisted photo metadata record."""

    id: str
    file_name: str
    download_url: str
    file_path: str
    album_id: str
    upload_time: datetime
    delete_at: datetime
    file_size: int

    @classmethod
    def from_draft(cls, photo_id: str, draft: PhotoDraft) -> "Photo":
        """Attach a store-assigned id to a draft."""
        return cls(
            id=photo_id,
            file_name=draft.file_name,
            download_url=draft.download_url,
            file_path=draft.file_path,
            album_id=draft.album_id,
            upload_time=draft.upload_time,
            delete_at=draft.delete_at,
            file_size=draft.file_size,
        )


@dataclass(frozen=True)
class AlbumRecord:
    """Album row as stored, without its photos."""

    id: str
    name: str
    share_link: str
    created_at: datetime
    views: int = 0


@dataclass(frozen=True)
class Album:
    """Album with its photos, newest upload first."""

    id: str
    name: str
    share_link: str
    created_at: datetime
    views: int = 0
    photos: list[Photo] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: AlbumRecord, photos: list[Photo]) -> "Album":
        return cls(
            id=record.id,
            name=record.name,
            share_link=record.share_link,
            created_at=record.created_at,
            views=record.views,
            photos=photos,
        )
