"""Tests for the public album endpoints."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from photo_share.api.app import create_app
from photo_share.containers import AppContainer
from tests.conftest import (
    FakeUploadClient,
    InMemoryAlbumRepository,
    InMemoryPhotoRepository,
)


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}


def test_create_album_action(
    container: AppContainer, album_repository: InMemoryAlbumRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api", json={"action": "create_album", "name": "Trip"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["albumId"] in album_repository.albums
    assert data["shareLink"] == f"https://share.test/album/{data['albumId']}"


def test_save_photo_and_get_album_actions(
    container: AppContainer, album_repository: InMemoryAlbumRepository
) -> None:
    client = TestClient(create_app(container))
    album_id = album_repository.add("Trip")
    now = datetime.now(tz=UTC)

    saved = client.post(
        "/api",
        json={
            "action": "save_photo",
            "photo": {
                "fileName": "a.jpg",
                "downloadURL": "https://cdn.test/a.jpg",
                "filePath": f"photo-share-albums/{album_id}/a.jpg",
                "albumId": album_id,
                "uploadTime": now.isoformat(),
                "deleteAt": (now + timedelta(hours=24)).isoformat(),
                "fileSize": 10,
            },
        },
    )
    album = client.get("/api", params={"action": "get_album", "albumId": album_id})
    photos = client.get("/api", params={"action": "get_photos", "albumId": album_id})
    albums = client.get("/api", params={"action": "get_albums"})

    assert saved.json()["success"] is True
    body = album.json()["album"]
    assert body["id"] == album_id
    assert body["photos"][0]["id"] == saved.json()["photoId"]
    assert body["photos"][0]["downloadURL"] == "https://cdn.test/a.jpg"
    assert photos.json()["photos"][0]["fileName"] == "a.jpg"
    assert [item["id"] for item in albums.json()["albums"]] == [album_id]


def test_missing_album_is_not_found(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/api", params={"action": "get_album", "albumId": "nope"})

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_unknown_action_is_bad_request(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api", json={"action": "launch_rocket"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Unknown action: launch_rocket",
    }


def test_increment_views_action(
    container: AppContainer, album_repository: InMemoryAlbumRepository
) -> None:
    client = TestClient(create_app(container))
    album_id = album_repository.add()

    response = client.post(
        "/api", json={"action": "increment_views", "albumId": album_id}
    )

    assert response.json() == {"success": True, "views": 1}


def test_upload_endpoint_creates_album(
    container: AppContainer,
    upload_client: FakeUploadClient,
    photo_repository: InMemoryPhotoRepository,
) -> None:
    client = TestClient(create_app(container))
    upload_client.permanent_failures.add("bad.png")

    response = client.post(
        "/albums",
        data={"name": "Party"},
        files=[
            ("files", ("a.jpg", b"aaa", "image/jpeg")),
            ("files", ("b.jpg", b"bbb", "image/jpeg")),
            ("files", ("bad.png", b"ccc", "image/png")),
        ],
    )

    assert response.status_code == 200
    data = response.json()
    assert data["summary"] == "partial"
    assert data["stats"] == {"done": 3, "success": 2, "failed": 1, "total": 3}
    assert len(data["album"]["photos"]) == 2
    assert len(photo_repository.photos) == 2
    failed = [item for item in data["results"] if not item["ok"]]
    assert failed == [
        {"fileName": "bad.png", "ok": False, "url": None, "error": "Invalid file type"}
    ]


def test_save_photo_for_missing_album_is_not_found(
    container: AppContainer, photo_repository: InMemoryPhotoRepository
) -> None:
    client = TestClient(create_app(container))
    now = datetime.now(tz=UTC)

    response = client.post(
        "/api",
        json={
            "action": "save_photo",
            "photo": {
                "fileName": "a.jpg",
                "downloadURL": "https://cdn.test/a.jpg",
                "filePath": "photo-share-albums/ghost/a.jpg",
                "albumId": "ghost",
                "uploadTime": now.isoformat(),
                "deleteAt": (now + timedelta(hours=24)).isoformat(),
                "fileSize": 10,
            },
        },
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Album ghost not found"}
    assert photo_repository.photos == {}


def test_upload_endpoint_names_album_when_blank(
    container: AppContainer, album_repository: InMemoryAlbumRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/albums", files=[("files", ("a.jpg", b"aaa", "image/jpeg"))]
    )

    assert response.status_code == 200
    album = response.json()["album"]
    assert album["name"] == f"Album {datetime.now(tz=UTC):%Y-%m-%d}"
    assert album_repository.albums[album["id"]].name == album["name"]
