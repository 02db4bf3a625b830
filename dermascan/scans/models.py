import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ImageFormat(str, Enum):
    """Upload formats accepted by the storage layer."""

    JPEG = "JPEG"


class ScanStatus:
    """Known scan statuses. The backend may report others; they are kept as-is."""

    PENDING_ANALYSIS = "pending_analysis"
    ANALYZED = "analyzed"
    FAILED = "failed"


@dataclass(frozen=True)
class ScanAsset:
    """A local image reference handed over by the acquisition source."""

    uri: str
    mime_type: str | None = None
    quality: float | None = None
    captured_at: datetime | None = None


@dataclass(frozen=True)
class CompressedImage:
    """Upload-ready image written to ephemeral local storage."""

    uri: str
    format: ImageFormat
    quality: float


@dataclass(frozen=True)
class ScanRecord:
    """A scan document as stored by the document store."""

    scan_id: str
    user_id: str
    image_path: str
    download_url: str
    status: str = ScanStatus.PENDING_ANALYSIS
    created_at: datetime | None = None
    updated_at: datetime | None = None
    captured_at: datetime | None = None

    @property
    def display_timestamp(self) -> datetime | None:
        """Best available timestamp for display: captured, then created, then updated."""
        return self.captured_at or self.created_at or self.updated_at

    @property
    def status_label(self) -> str:
        return self.status.upper() if self.status else "PENDING"


@dataclass(frozen=True)
class UploadScanResult:
    scan_id: str
    storage_path: str
    download_url: str


@dataclass(frozen=True)
class AuthUser:
    """Identity exposed by the auth provider."""

    uid: str
    display_name: str | None = None
    email: str | None = None


def new_scan_id() -> str:
    """Mint a scan identifier locally, without a backend round-trip."""
    return uuid.uuid4().hex


def scan_image_path(user_id: str, scan_id: str) -> str:
    """Build storage path for a scan image: users/{user_id}/scans/{scan_id}.jpg"""
    return f"users/{user_id}/scans/{scan_id}.jpg"
