"""Action-dispatched album and photo metadata endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from photo_share.api.schemas import ActionRequest, AlbumPayload, PhotoPayload, dump
from photo_share.domain.errors import InvalidArgument, NotFound

if TYPE_CHECKING:
    from photo_share.containers import AppContainer

router = APIRouter(prefix="/api", tags=["metadata"])


@router.post("")
async def post_action(body: ActionRequest, request: Request) -> dict[str, object]:
    """Handle ``create_album``, ``save_photo`` and ``increment_views``."""
    container: AppContainer = request.app.state.container
    albums = container.album_service
    if body.action == "create_album":
        album_id = albums.create_album(body.name or "")
        album = albums.get_album(album_id)
        return {
            "success": True,
            "albumId": album_id,
            "shareLink": album.share_link if album else "",
        }
    if body.action == "save_photo":
        if body.photo is None:
            raise InvalidArgument("Photo is required")
        return {"success": True, "photoId": albums.save_photo(body.photo.to_draft())}
    if body.action == "increment_views":
        return {"success": True, "views": albums.increment_views(body.album_id or "")}
    raise InvalidArgument(f"Unknown action: {body.action}")


@router.get("")
async def get_action(
    request: Request,
    action: str,
    album_id: str | None = Query(default=None, alias="albumId"),
) -> dict[str, object]:
    """Handle ``get_photos``, ``get_album`` and ``get_albums``."""
    container: AppContainer = request.app.state.container
    albums = container.album_service
    if action == "get_photos":
        photos = albums.get_photos(album_id or "")
        return {
            "success": True,
            "photos": [dump(PhotoPayload.from_photo(photo)) for photo in photos],
        }
    if action == "get_album":
        album = albums.get_album(album_id or "")
        if album is None:
            raise NotFound(f"Album {album_id} not found")
        return {"success": True, "album": dump(AlbumPayload.from_album(album))}
    if action == "get_albums":
        return {
            "success": True,
            "albums": [
                dump(AlbumPayload.from_album(album)) for album in albums.list_albums()
            ],
        }
    raise InvalidArgument(f"Unknown action: {action}")
