import psycopg
from psycopg.rows import dict_row

from dermascan.database.base import BaseScanDocumentStore, page_offset, validate_record
from dermascan.database.connection import Database
from dermascan.database.exceptions import DocumentStoreError
from dermascan.scans.models import ScanRecord

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS scans (
    scan_id      TEXT PRIMARY KEY,
    seq          BIGINT GENERATED ALWAYS AS IDENTITY,
    user_id      TEXT NOT NULL,
    image_path   TEXT NOT NULL,
    download_url TEXT NOT NULL,
    status       TEXT NOT NULL,
    captured_at  TIMESTAMPTZ NULL,
    created_at   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at   TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS scans_user_created_idx
    ON scans (user_id, created_at DESC, seq DESC);
"""


class PostgresScanDocumentStore(BaseScanDocumentStore):
    """Database operations for the scans table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def ensure_schema(self) -> None:
        """Create the scans table and index when missing."""
        try:
            async with self._db.connection() as conn:
                await conn.execute(SCHEMA_SQL)
                await conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to create scans schema: {exc}") from exc

    async def create_scan_document(self, record: ScanRecord) -> None:
        """Insert a scan record; created_at/updated_at are set by the database.

        Raises:
            DocumentStoreError: on invalid record or database failure.
        """
        validate_record(record)
        try:
            async with self._db.connection() as conn:
                await conn.execute(
                    """
                    INSERT INTO scans
                        (scan_id, user_id, image_path, download_url, status,
                         captured_at, created_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s, %s, NOW(), NOW())
                    """,
                    (
                        record.scan_id,
                        record.user_id,
                        record.image_path,
                        record.download_url,
                        record.status,
                        record.captured_at,
                    ),
                )
                await conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(
                f"Failed to create scan {record.scan_id}: {exc}"
            ) from exc

    async def list_scans(self, user_id: str, page: int, page_size: int) -> list[ScanRecord]:
        """Fetch one page of scans, newest first; same-instant inserts by insert order."""
        offset = page_offset(page, page_size)
        try:
            async with self._db.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        """
                        SELECT scan_id, user_id, image_path, download_url, status,
                               captured_at, created_at, updated_at
                        FROM scans
                        WHERE user_id = %s
                        ORDER BY created_at DESC, seq DESC
                        LIMIT %s OFFSET %s
                        """,
                        (user_id, page_size, offset),
                    )
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise DocumentStoreError(
                f"Failed to list scans for user {user_id}: {exc}"
            ) from exc

        return [
            ScanRecord(
                scan_id=row["scan_id"],
                user_id=row["user_id"],
                image_path=row["image_path"],
                download_url=row["download_url"],
                status=row["status"],
                captured_at=row["captured_at"],
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
            for row in rows
        ]

    async def count_scans(self, user_id: str) -> int:
        try:
            async with self._db.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        "SELECT COUNT(*) FROM scans WHERE user_id = %s",
                        (user_id,),
                    )
                    row = await cur.fetchone()
        except psycopg.Error as exc:
            raise DocumentStoreError(
                f"Failed to count scans for user {user_id}: {exc}"
            ) from exc

        return int(row[0]) if row is not None else 0
