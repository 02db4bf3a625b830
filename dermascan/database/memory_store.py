import itertools
from dataclasses import replace
from datetime import UTC, datetime

from dermascan.database.base import BaseScanDocumentStore, page_offset, validate_record
from dermascan.database.exceptions import DocumentStoreError
from dermascan.scans.models import ScanRecord


class InMemoryScanDocumentStore(BaseScanDocumentStore):
    """Process-local document store.

    No network calls. Useful for local development and tests; ordering
    matches the PostgreSQL store (created_at DESC, then newest insert first).
    """

    def __init__(self) -> None:
        self._records: dict[str, ScanRecord] = {}
        self._inserted: dict[str, int] = {}
        self._sequence = itertools.count()

    async def create_scan_document(self, record: ScanRecord) -> None:
        validate_record(record)
        if record.scan_id in self._records:
            raise DocumentStoreError(f"Scan {record.scan_id} already exists")
        now = datetime.now(UTC)
        self._records[record.scan_id] = replace(
            record,
            created_at=record.created_at or now,
            updated_at=record.updated_at or now,
        )
        self._inserted[record.scan_id] = next(self._sequence)

    async def list_scans(self, user_id: str, page: int, page_size: int) -> list[ScanRecord]:
        offset = page_offset(page, page_size)
        return self._ordered(user_id)[offset : offset + page_size]

    async def count_scans(self, user_id: str) -> int:
        return sum(1 for r in self._records.values() if r.user_id == user_id)

    def find_by_id(self, scan_id: str) -> ScanRecord | None:
        """Find a scan by ID. Useful for tests."""
        return self._records.get(scan_id)

    def _ordered(self, user_id: str) -> list[ScanRecord]:
        owned = [r for r in self._records.values() if r.user_id == user_id]
        return sorted(
            owned,
            key=lambda r: (
                r.created_at or datetime.min.replace(tzinfo=UTC),
                self._inserted[r.scan_id],
            ),
            reverse=True,
        )
