"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from photo_share.adapters.supabase_album_repository import SupabaseAlbumRepository
from photo_share.adapters.supabase_blob_storage import SupabaseBlobStorage
from photo_share.adapters.supabase_photo_repository import SupabasePhotoRepository
from photo_share.adapters.upload_endpoint_client import HttpxUploadEndpointClient
from photo_share.config import Settings, clamp_concurrency
from photo_share.services.albums import (
    AlbumRepository,
    AlbumService,
    PhotoRepository,
)
from photo_share.services.cleanup import BlobStorage, PhotoCleanupService
from photo_share.services.expiration import (
    AlbumPurgeService,
    EmptyAlbumReclaimer,
    ExpirationSweeper,
)
from photo_share.services.retry import RetryPolicy
from photo_share.services.scheduler import PeriodicJob
from photo_share.services.sharing import ShareService
from photo_share.services.uploads import BatchUploadScheduler, UploadClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    upload_client: UploadClient
    album_service: AlbumService
    share_service: ShareService
    cleanup_service: PhotoCleanupService
    sweeper: ExpirationSweeper
    reclaimer: EmptyAlbumReclaimer
    purge_service: AlbumPurgeService
    jobs: list[PeriodicJob]
    close_resources: Callable[[], Awaitable[None]]


def build_services(  # noqa: PLR0913
    settings: Settings,
    upload_client: UploadClient,
    album_repository: AlbumRepository,
    photo_repository: PhotoRepository,
    storage: BlobStorage,
    close_resources: Callable[[], Awaitable[None]],
    retry_policy: RetryPolicy | None = None,
) -> AppContainer:
    """Wire services on top of already-built adapters."""
    album_service = AlbumService(
        album_repository=album_repository,
        photo_repository=photo_repository,
        serving_origin=settings.serving_origin,
        upload_folder=settings.upload_folder,
        retention=timedelta(hours=settings.retention_hours),
    )
    scheduler = BatchUploadScheduler(
        client=upload_client,
        retry_policy=retry_policy
        or RetryPolicy(
            max_attempts=settings.upload_max_retries,
            base_delay=settings.retry_base_delay_seconds,
            max_jitter=settings.retry_max_jitter_seconds,
        ),
        worker_delay=settings.worker_delay_seconds,
    )
    share_service = ShareService(
        album_service=album_service,
        scheduler=scheduler,
        concurrency=clamp_concurrency(settings.upload_concurrency),
        max_retries=settings.upload_max_retries,
    )
    cleanup_service = PhotoCleanupService(photo_repository, storage)
    reclaimer = EmptyAlbumReclaimer(
        album_repository,
        photo_repository,
        grace=timedelta(hours=settings.retention_hours),
    )
    sweeper = ExpirationSweeper(photo_repository, cleanup_service, reclaimer)
    purge_service = AlbumPurgeService(
        album_repository=album_repository,
        photo_repository=photo_repository,
        cleanup=cleanup_service,
    )
    jobs = [
        PeriodicJob(
            name="expiration-sweep",
            interval_seconds=settings.sweep_interval_seconds,
            action=sweeper.sweep,
        ),
        PeriodicJob(
            name="empty-album-reclaim",
            interval_seconds=settings.reclaim_interval_seconds,
            action=reclaimer.run,
        ),
    ]
    return AppContainer(
        settings=settings,
        upload_client=upload_client,
        album_service=album_service,
        share_service=share_service,
        cleanup_service=cleanup_service,
        sweeper=sweeper,
        reclaimer=reclaimer,
        purge_service=purge_service,
        jobs=jobs,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    upload_client = HttpxUploadEndpointClient.create(
        endpoint_url=resolved_settings.upload_endpoint_url,
        folder=resolved_settings.upload_folder,
        timeout=resolved_settings.upload_timeout_seconds,
    )

    async def close_resources() -> None:
        await upload_client.close()

    return build_services(
        settings=resolved_settings,
        upload_client=upload_client,
        album_repository=SupabaseAlbumRepository(supabase_client),
        photo_repository=SupabasePhotoRepository(supabase_client),
        storage=SupabaseBlobStorage(supabase_client, resolved_settings.storage_bucket),
        close_resources=close_resources,
    )
