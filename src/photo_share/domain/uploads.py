"""Domain models for batch uploads."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import uuid4


class UploadStatus(StrEnum):
    """Lifecycle of a single file within a batch."""

    WAITING = "waiting"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked for upload, identified independently of its name."""

    id: str
    name: str
    mime_type: str
    content: bytes

    @classmethod
    def create(cls, name: str, mime_type: str, content: bytes) -> "SelectedFile":
        """Create a selected file with a fresh synthetic id."""
        return cls(id=uuid4().hex, name=name, mime_type=mime_type, content=content)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadProgress:
    """Per-file progress shown while a batch runs."""

    file_id: str
    file_name: str
    progress: int = 0
    status: UploadStatus = UploadStatus.WAITING


@dataclass(frozen=True)
class BatchStats:
    """Aggregate counters for a batch; ``done == success + failed``."""

    done: int = 0
    success: int = 0
    failed: int = 0
    total: int = 0


@dataclass(frozen=True)
class UploadResult:
    """Outcome of uploading one file."""

    file: SelectedFile
    ok: bool
    url: str | None = None
    error: str | None = None
