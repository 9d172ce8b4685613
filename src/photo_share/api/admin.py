"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from photo_share.api.schemas import ForceDeleteRequest

if TYPE_CHECKING:
    from photo_share.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/albums/force-delete", dependencies=[Depends(require_admin)])
async def force_delete_album(
    body: ForceDeleteRequest, request: Request
) -> dict[str, object]:
    """Irreversibly delete an album and all of its photos."""
    container: AppContainer = request.app.state.container
    result = await container.purge_service.force_delete_album(body.album_id)
    return {"success": result.success, "deletedPhotos": result.deleted_photos}


@router.delete("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(photo_id: str, request: Request) -> dict[str, object]:
    """Remove one photo record; its payload is cleaned up by the delete hook."""
    container: AppContainer = request.app.state.container
    removed = await container.cleanup_service.remove_photo(photo_id)
    return {"success": True, "deleted": removed is not None}


@router.post("/jobs/sweep", dependencies=[Depends(require_admin)])
async def run_sweep(request: Request) -> dict[str, object]:
    """Run an expiration sweep now."""
    container: AppContainer = request.app.state.container
    report = await container.sweeper.sweep()
    return {
        "success": True,
        "expired": report.expired,
        "deleted": report.deleted,
        "payloadFailures": report.payload_failures,
        "metadataFailures": report.metadata_failures,
        "reclaimedAlbums": report.reclaimed_albums,
    }


@router.post("/jobs/reclaim", dependencies=[Depends(require_admin)])
async def run_reclaim(request: Request) -> dict[str, object]:
    """Delete empty albums now."""
    container: AppContainer = request.app.state.container
    return {"success": True, "reclaimedAlbums": await container.reclaimer.run()}
