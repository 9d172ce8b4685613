"""Client for the remote upload endpoint."""

import base64
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx

from photo_share.domain.errors import RemoteRejected, TransportError
from photo_share.domain.uploads import SelectedFile
from photo_share.services.uploads import UploadClient


@dataclass
class HttpxUploadEndpointClient(UploadClient):
    """Uploads one file per call as a base64 JSON payload. Never retries."""

    endpoint_url: str
    folder: str
    http_client: httpx.AsyncClient
    timeout: float = 60

    @classmethod
    def create(
        cls, endpoint_url: str, folder: str, timeout: float = 60
    ) -> "HttpxUploadEndpointClient":
        """Create an upload client with a managed httpx session."""
        return cls(
            endpoint_url=endpoint_url,
            folder=folder,
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout=timeout,
        )

    def build_payload(self, file: SelectedFile, album_id: str) -> dict[str, object]:
        """Build the self-describing request body for one file."""
        return {
            "action": "upload_photo",
            "fileName": file.name,
            "mimeType": file.mime_type,
            "data": base64.b64encode(file.content).decode("ascii"),
            "albumId": album_id,
            "folder": self.folder,
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    async def upload(self, file: SelectedFile, album_id: str) -> str:
        """Upload the file and return the URL reported by the endpoint."""
        try:
            response = await self.http_client.post(
                self.endpoint_url,
                json=self.build_payload(file, album_id),
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"Upload timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(
                "Malformed upload response", status_code=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise TransportError(
                "Malformed upload response", status_code=response.status_code
            )
        if not payload.get("success"):
            raise RemoteRejected(
                str(payload.get("error") or "Upload endpoint reported failure"),
                status_code=response.status_code,
            )
        url = payload.get("directUrl") or payload.get("fileUrl")
        if not url:
            raise RemoteRejected(
                "Upload response is missing a file URL",
                status_code=response.status_code,
            )
        return str(url)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
