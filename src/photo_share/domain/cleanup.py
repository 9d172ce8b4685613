"""Domain models for expiration and cleanup jobs."""

from dataclasses import dataclass, field
from enum import StrEnum


class SweepState(StrEnum):
    """States of the expiration sweeper."""

    IDLE = "idle"
    SCANNING = "scanning"
    DELETING = "deleting"


@dataclass(frozen=True)
class SweepReport:
    """Outcome of one sweep pass."""

    expired: int = 0
    deleted: int = 0
    payload_failures: int = 0
    metadata_failures: int = 0
    reclaimed_albums: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ForceDeleteResult:
    """Outcome of an administrative album deletion."""

    success: bool
    deleted_photos: int
