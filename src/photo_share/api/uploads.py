"""Batch upload endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, UploadFile

from photo_share.api.schemas import (
    AlbumPayload,
    BatchStatsPayload,
    UploadResultPayload,
    dump,
)
from photo_share.domain.uploads import SelectedFile
from photo_share.services.sharing import OutcomeKind
from photo_share.services.uploads import UploadSession

if TYPE_CHECKING:
    from photo_share.containers import AppContainer

router = APIRouter(tags=["uploads"])


@router.post("/albums")
async def create_shared_album(
    request: Request,
    name: str | None = Form(None),
    files: list[UploadFile] = File(...),
) -> dict[str, object]:
    """Create an album from a batch of uploaded files."""
    container: AppContainer = request.app.state.container
    selected = [
        SelectedFile.create(
            name=upload.filename or "upload",
            mime_type=upload.content_type or "application/octet-stream",
            content=await upload.read(),
        )
        for upload in files
    ]
    outcome = await container.share_service.share(name, UploadSession.select(selected))
    return {
        "success": outcome.kind is not OutcomeKind.FAILURE,
        "summary": outcome.kind.value,
        "stats": dump(BatchStatsPayload.from_stats(outcome.stats)),
        "album": dump(AlbumPayload.from_album(outcome.album)),
        "results": [
            dump(UploadResultPayload.from_result(result)) for result in outcome.results
        ],
    }
