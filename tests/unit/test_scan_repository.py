from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import psycopg
import pytest

from dermascan.database.exceptions import DocumentStoreError
from dermascan.database.repositories.scan_repository import PostgresScanDocumentStore
from dermascan.scans.models import ScanRecord
from tests.helpers import make_record

CREATED = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _make_row(scan_id: str = "s1") -> dict:
    return {
        "scan_id": scan_id,
        "user_id": "u1",
        "image_path": f"users/u1/scans/{scan_id}.jpg",
        "download_url": f"https://cdn.test/users/u1/scans/{scan_id}.jpg",
        "status": "pending_analysis",
        "captured_at": None,
        "created_at": CREATED,
        "updated_at": CREATED,
    }


def _mock_database() -> tuple[MagicMock, MagicMock, MagicMock]:
    """Wire up a mock Database + connection + cursor and return all three."""
    mock_cursor = MagicMock()
    mock_cursor.execute = AsyncMock()
    mock_cursor.fetchall = AsyncMock(return_value=[])
    mock_cursor.fetchone = AsyncMock(return_value=None)
    mock_conn = MagicMock()
    mock_conn.execute = AsyncMock()
    mock_conn.commit = AsyncMock()
    mock_conn.cursor.return_value.__aenter__.return_value = mock_cursor
    mock_conn.cursor.return_value.__aexit__.return_value = False
    mock_db = MagicMock()
    mock_db.connection.return_value.__aenter__.return_value = mock_conn
    mock_db.connection.return_value.__aexit__.return_value = False
    return mock_db, mock_conn, mock_cursor


class TestCreateScanDocument:
    @pytest.mark.asyncio
    async def test_inserts_and_commits(self) -> None:
        mock_db, mock_conn, _cursor = _mock_database()
        store = PostgresScanDocumentStore(mock_db)

        await store.create_scan_document(make_record("s1"))

        sql, params = mock_conn.execute.call_args.args
        assert "INSERT INTO scans" in sql
        assert params == (
            "s1",
            "u1",
            "users/u1/scans/s1.jpg",
            "https://cdn.test/users/u1/scans/s1.jpg",
            "pending_analysis",
            None,
        )
        mock_conn.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejects_invalid_record_without_touching_db(self) -> None:
        mock_db, mock_conn, _cursor = _mock_database()
        store = PostgresScanDocumentStore(mock_db)
        record = ScanRecord(scan_id="", user_id="u1", image_path="p", download_url="d")

        with pytest.raises(DocumentStoreError, match="scan_id"):
            await store.create_scan_document(record)

        mock_conn.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_wraps_database_errors(self) -> None:
        mock_db, mock_conn, _cursor = _mock_database()
        mock_conn.execute.side_effect = psycopg.OperationalError("connection lost")
        store = PostgresScanDocumentStore(mock_db)

        with pytest.raises(DocumentStoreError, match="Failed to create scan s1"):
            await store.create_scan_document(make_record("s1"))

        mock_conn.commit.assert_not_called()


class TestListScans:
    @pytest.mark.asyncio
    async def test_returns_records(self) -> None:
        mock_db, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchall.return_value = [_make_row("s2"), _make_row("s1")]
        store = PostgresScanDocumentStore(mock_db)

        result = await store.list_scans("u1", 1, 2)

        assert [r.scan_id for r in result] == ["s2", "s1"]
        assert result[0].created_at == CREATED
        assert result[0].status == "pending_analysis"

    @pytest.mark.asyncio
    async def test_passes_limit_and_offset(self) -> None:
        mock_db, _conn, mock_cursor = _mock_database()
        store = PostgresScanDocumentStore(mock_db)

        await store.list_scans("u1", 3, 10)

        sql, params = mock_cursor.execute.call_args.args
        assert "ORDER BY created_at DESC, seq DESC" in sql
        assert params == ("u1", 10, 20)

    @pytest.mark.asyncio
    async def test_wraps_database_errors(self) -> None:
        mock_db, _conn, mock_cursor = _mock_database()
        mock_cursor.execute.side_effect = psycopg.OperationalError("timeout")
        store = PostgresScanDocumentStore(mock_db)

        with pytest.raises(DocumentStoreError, match="Failed to list scans"):
            await store.list_scans("u1", 1, 10)


class TestCountScans:
    @pytest.mark.asyncio
    async def test_returns_count(self) -> None:
        mock_db, _conn, mock_cursor = _mock_database()
        mock_cursor.fetchone.return_value = (7,)
        store = PostgresScanDocumentStore(mock_db)

        assert await store.count_scans("u1") == 7

    @pytest.mark.asyncio
    async def test_returns_zero_when_no_row(self) -> None:
        mock_db, _conn, _cursor = _mock_database()
        store = PostgresScanDocumentStore(mock_db)

        assert await store.count_scans("u1") == 0

    @pytest.mark.asyncio
    async def test_wraps_database_errors(self) -> None:
        mock_db, _conn, mock_cursor = _mock_database()
        mock_cursor.execute.side_effect = psycopg.OperationalError("timeout")
        store = PostgresScanDocumentStore(mock_db)

        with pytest.raises(DocumentStoreError, match="Failed to count scans"):
            await store.count_scans("u1")
