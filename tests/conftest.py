"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from photo_share.config import Settings
from photo_share.containers import AppContainer, build_services
from photo_share.domain.errors import RemoteRejected
from photo_share.domain.models import AlbumRecord, Photo, PhotoDraft
from photo_share.domain.uploads import SelectedFile
from photo_share.services.albums import AlbumRepository, PhotoRepository
from photo_share.services.cleanup import BlobStorage
from photo_share.services.retry import RetryPolicy
from photo_share.services.uploads import UploadClient


async def no_sleep(_seconds: float) -> None:
    return None


def instant_retry_policy(max_attempts: int = 3) -> RetryPolicy:
    """Retry policy that never actually waits."""
    return RetryPolicy(
        max_attempts=max_attempts,
        base_delay=0.0,
        sleep=no_sleep,
        jitter=lambda _max: 0.0,
    )


def make_file(name: str, content: bytes = b"image-bytes") -> SelectedFile:
    return SelectedFile.create(name=name, mime_type="image/jpeg", content=content)


@dataclass
class InMemoryAlbumRepository(AlbumRepository):
    """In-memory album repository for tests."""

    albums: dict[str, AlbumRecord] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    failing_deletes: set[str] = field(default_factory=set)

    def create_album(self, name: str, created_at: datetime) -> str:
        album_id = uuid4().hex
        self.albums[album_id] = AlbumRecord(
            id=album_id, name=name, share_link="", created_at=created_at
        )
        return album_id

    def set_share_link(self, album_id: str, share_link: str) -> None:
        record = self.albums.get(album_id)
        if record is not None:
            self.albums[album_id] = replace(record, share_link=share_link)

    def get_album(self, album_id: str) -> AlbumRecord | None:
        return self.albums.get(album_id)

    def list_albums(self) -> list[AlbumRecord]:
        return sorted(
            self.albums.values(), key=lambda record: record.created_at, reverse=True
        )

    def increment_views(self, album_id: str) -> int:
        record = self.albums[album_id]
        self.albums[album_id] = replace(record, views=record.views + 1)
        return record.views + 1

    def delete_album(self, album_id: str) -> None:
        if album_id in self.failing_deletes:
            raise RuntimeError(f"cannot delete album {album_id}")
        self.albums.pop(album_id, None)
        self.deleted.append(album_id)

    def add(self, name: str = "Album", created_at: datetime | None = None) -> str:
        # Seeded albums predate the reclaim grace window unless told otherwise.
        seeded_at = created_at or datetime.now(tz=UTC) - timedelta(days=2)
        album_id = self.create_album(name, seeded_at)
        self.set_share_link(album_id, f"https://share.test/album/{album_id}")
        return album_id


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: dict[str, Photo] = field(default_factory=dict)
    failing_saves: set[str] = field(default_factory=set)
    failing_deletes: set[str] = field(default_factory=set)
    delete_calls: list[str] = field(default_factory=list)

    def save_photo(self, draft: PhotoDraft) -> str:
        if draft.file_name in self.failing_saves:
            raise RuntimeError(f"cannot save {draft.file_name}")
        photo_id = uuid4().hex
        self.photos[photo_id] = Photo.from_draft(photo_id, draft)
        return photo_id

    def get_photo(self, photo_id: str) -> Photo | None:
        return self.photos.get(photo_id)

    def list_album_photos(self, album_id: str) -> list[Photo]:
        return sorted(
            (photo for photo in self.photos.values() if photo.album_id == album_id),
            key=lambda photo: photo.upload_time,
            reverse=True,
        )

    def count_album_photos(self, album_id: str) -> int:
        return len(self.list_album_photos(album_id))

    def list_expired_photos(self, now: datetime) -> list[Photo]:
        return [photo for photo in self.photos.values() if photo.delete_at <= now]

    def delete_photo(self, photo_id: str) -> None:
        self.delete_calls.append(photo_id)
        if photo_id in self.failing_deletes:
            raise RuntimeError(f"cannot delete photo {photo_id}")
        self.photos.pop(photo_id, None)

    def add(
        self,
        album_id: str,
        file_name: str = "photo.jpg",
        delete_at: datetime | None = None,
        upload_time: datetime | None = None,
    ) -> Photo:
        uploaded = upload_time or datetime.now(tz=UTC)
        photo_id = self.save_photo(
            PhotoDraft(
                file_name=file_name,
                download_url=f"https://cdn.test/{file_name}",
                file_path=f"photo-share-albums/{album_id}/{file_name}",
                album_id=album_id,
                upload_time=uploaded,
                delete_at=delete_at or uploaded + timedelta(hours=24),
                file_size=11,
            )
        )
        return self.photos[photo_id]


@dataclass
class InMemoryBlobStorage(BlobStorage):
    """In-memory payload store for tests."""

    objects: set[str] = field(default_factory=set)
    deleted: list[str] = field(default_factory=list)
    failing_paths: set[str] = field(default_factory=set)

    def delete(self, file_path: str) -> None:
        if file_path in self.failing_paths:
            raise RuntimeError(f"storage unavailable for {file_path}")
        self.objects.discard(file_path)
        self.deleted.append(file_path)


@dataclass
class FakeUploadClient(UploadClient):
    """Upload client with scripted failures and concurrency tracking."""

    transient_failures: dict[str, int] = field(default_factory=dict)
    permanent_failures: set[str] = field(default_factory=set)
    delay: float = 0.0
    calls: list[str] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0
    gate: asyncio.Event | None = None

    async def upload(self, file: SelectedFile, album_id: str) -> str:
        self.calls.append(file.name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(self.delay)
            if file.name in self.permanent_failures:
                raise RemoteRejected("Invalid file type")
            remaining = self.transient_failures.get(file.name, 0)
            if remaining > 0:
                self.transient_failures[file.name] = remaining - 1
                raise RemoteRejected("Service invoked too many times for one day")
            return f"https://cdn.test/{album_id}/{file.name}"
        finally:
            self.in_flight -= 1


@pytest.fixture
def settings() -> Settings:
    return Settings(
        upload_endpoint_url="https://uploads.test/exec",
        serving_origin="https://share.test",
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
        worker_delay_seconds=0,
        scheduler_enabled=False,
    )


@pytest.fixture
def album_repository() -> InMemoryAlbumRepository:
    return InMemoryAlbumRepository()


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def storage() -> InMemoryBlobStorage:
    return InMemoryBlobStorage()


@pytest.fixture
def upload_client() -> FakeUploadClient:
    return FakeUploadClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    upload_client: FakeUploadClient,
    album_repository: InMemoryAlbumRepository,
    photo_repository: InMemoryPhotoRepository,
    storage: InMemoryBlobStorage,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return build_services(
        settings=settings,
        upload_client=upload_client,
        album_repository=album_repository,
        photo_repository=photo_repository,
        storage=storage,
        close_resources=close_resources,
        retry_policy=instant_retry_policy(settings.upload_max_retries),
    )
