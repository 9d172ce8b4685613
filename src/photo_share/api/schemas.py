"""Pydantic models for the HTTP wire format."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from photo_share.domain.models import Album, Photo, PhotoDraft
from photo_share.domain.uploads import BatchStats, UploadResult


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PhotoPayload(_WireModel):
    """Photo record as exchanged with clients."""

    id: str | None = None
    file_name: str = Field(alias="fileName")
    download_url: str = Field(alias="downloadURL")
    file_path: str = Field(alias="filePath")
    album_id: str = Field(alias="albumId")
    upload_time: datetime = Field(alias="uploadTime")
    delete_at: datetime = Field(alias="deleteAt")
    file_size: int = Field(default=0, alias="fileSize", ge=0)

    @classmethod
    def from_photo(cls, photo: Photo) -> "PhotoPayload":
        return cls(
            id=photo.id,
            file_name=photo.file_name,
            download_url=photo.download_url,
            file_path=photo.file_path,
            album_id=photo.album_id,
            upload_time=photo.upload_time,
            delete_at=photo.delete_at,
            file_size=photo.file_size,
        )

    def to_draft(self) -> PhotoDraft:
        return PhotoDraft(
            file_name=self.file_name,
            download_url=self.download_url,
            file_path=self.file_path,
            album_id=self.album_id,
            upload_time=self.upload_time,
            delete_at=self.delete_at,
            file_size=self.file_size,
        )


class AlbumPayload(_WireModel):
    """Album with photos as exchanged with clients."""

    id: str
    name: str
    photos: list[PhotoPayload]
    share_link: str = Field(alias="shareLink")
    created_at: datetime = Field(alias="createdAt")
    views: int = Field(ge=0)

    @classmethod
    def from_album(cls, album: Album) -> "AlbumPayload":
        return cls(
            id=album.id,
            name=album.name,
            photos=[PhotoPayload.from_photo(photo) for photo in album.photos],
            share_link=album.share_link,
            created_at=album.created_at,
            views=album.views,
        )


class ActionRequest(_WireModel):
    """POST body for the action endpoint."""

    action: str
    name: str | None = None
    album_id: str | None = Field(default=None, alias="albumId")
    photo: PhotoPayload | None = None


class ForceDeleteRequest(_WireModel):
    """Body for the administrative album deletion."""

    album_id: str | None = Field(default=None, alias="albumId")


class UploadResultPayload(_WireModel):
    file_name: str = Field(alias="fileName")
    ok: bool
    url: str | None = None
    error: str | None = None

    @classmethod
    def from_result(cls, result: UploadResult) -> "UploadResultPayload":
        return cls(
            file_name=result.file.name,
            ok=result.ok,
            url=result.url,
            error=result.error,
        )


class BatchStatsPayload(_WireModel):
    done: int
    success: int
    failed: int
    total: int

    @classmethod
    def from_stats(cls, stats: BatchStats) -> "BatchStatsPayload":
        return cls(
            done=stats.done,
            success=stats.success,
            failed=stats.failed,
            total=stats.total,
        )


def dump(model: BaseModel) -> dict[str, object]:
    """Serialize a wire model with its camelCase aliases."""
    return model.model_dump(by_alias=True, mode="json")
