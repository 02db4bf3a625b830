from dermascan.config.settings import Settings
from dermascan.database.base import BaseScanDocumentStore
from dermascan.database.connection import Database
from dermascan.database.memory_store import InMemoryScanDocumentStore
from dermascan.database.repositories.scan_repository import PostgresScanDocumentStore


class ScanDocumentStoreFactory:
    """Creates the configured scan document store."""

    STORES = ("postgres", "memory")

    @classmethod
    def create(
        cls,
        settings: Settings,
        database: Database | None = None,
    ) -> BaseScanDocumentStore:
        """Create a document store; the postgres store needs an opened Database."""
        kind = settings.document_store.lower()
        if kind == "memory":
            return InMemoryScanDocumentStore()
        if kind == "postgres":
            if database is None:
                raise ValueError("A Database is required for document_store=postgres")
            return PostgresScanDocumentStore(database)
        raise ValueError(
            f"Unknown document store '{kind}'. Choose from: {list(cls.STORES)}"
        )
