"""Tests for container wiring."""

import asyncio

from photo_share.adapters.upload_endpoint_client import HttpxUploadEndpointClient
from photo_share.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.upload_client, HttpxUploadEndpointClient)
    assert container.share_service.concurrency == settings.upload_concurrency
    assert [job.name for job in container.jobs] == [
        "expiration-sweep",
        "empty-album-reclaim",
    ]
    asyncio.run(container.close_resources())
