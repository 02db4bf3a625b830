from abc import ABC, abstractmethod

from dermascan.database.exceptions import DocumentStoreError
from dermascan.scans.models import ScanRecord


class BaseScanDocumentStore(ABC):
    """Contract for document stores holding scan records.

    Pages are numbered from 1 and ordered most-recent-first.
    """

    @abstractmethod
    async def create_scan_document(self, record: ScanRecord) -> None:
        """Persist a new scan record.

        Raises:
            DocumentStoreError: on transport or validation failure.
        """

    @abstractmethod
    async def list_scans(self, user_id: str, page: int, page_size: int) -> list[ScanRecord]:
        """Return one page of the user's scans.

        Raises:
            DocumentStoreError: on transport failure.
        """

    @abstractmethod
    async def count_scans(self, user_id: str) -> int:
        """Return the authoritative number of scans for the user.

        Raises:
            DocumentStoreError: on transport failure.
        """


def validate_record(record: ScanRecord) -> None:
    """Reject records missing the fields every scan document needs."""
    for name in ("scan_id", "user_id", "image_path", "download_url", "status"):
        if not getattr(record, name):
            raise DocumentStoreError(f"Scan record field '{name}' must be non-empty")


def page_offset(page: int, page_size: int) -> int:
    if page < 1 or page_size < 1:
        raise ValueError(f"page and page_size must be >= 1, got {page}/{page_size}")
    return (page - 1) * page_size
