import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from dermascan.config.settings import Settings
from dermascan.database.connection import Database
from dermascan.database.repositories.scan_repository import PostgresScanDocumentStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "dermascan_test")
    return Settings(db_open_timeout=3.0)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    db = Database(test_settings)
    try:
        await db.open()
    except Exception as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def user_id() -> str:
    return f"it-{uuid.uuid4().hex}"


@pytest_asyncio.fixture
async def scan_store(
    database: Database, user_id: str
) -> AsyncGenerator[PostgresScanDocumentStore, None]:
    store = PostgresScanDocumentStore(database)
    await store.ensure_schema()
    try:
        yield store
    finally:
        async with database.connection() as conn:
            await conn.execute("DELETE FROM scans WHERE user_id = %s", (user_id,))
            await conn.commit()
