import asyncio
from collections.abc import Callable

from dermascan.database.base import BaseScanDocumentStore
from dermascan.logging.logger import Log
from dermascan.preprocessing.base import BaseImagePreprocessor
from dermascan.scans.models import ScanRecord, ScanStatus, new_scan_id
from dermascan.scans.pipeline import UploadContext, UploadStep
from dermascan.storage.base import BaseObjectStorage


class CompressImageStep(UploadStep):
    name = "compress"

    def __init__(self, preprocessor: BaseImagePreprocessor) -> None:
        self._preprocessor = preprocessor

    async def run(self, context: UploadContext) -> UploadContext:
        context.compressed = await asyncio.to_thread(
            self._preprocessor.compress, context.asset
        )
        Log.debug(
            f"Compressed {context.asset.uri} to {context.compressed.uri} "
            f"({context.compressed.format.value} q={context.compressed.quality})"
        )
        return context


class AllocateScanIdStep(UploadStep):
    name = "allocate id"

    def __init__(self, id_factory: Callable[[], str] = new_scan_id) -> None:
        self._id_factory = id_factory

    async def run(self, context: UploadContext) -> UploadContext:
        context.scan_id = self._id_factory()
        return context


class UploadImageStep(UploadStep):
    name = "upload image"

    def __init__(self, storage: BaseObjectStorage) -> None:
        self._storage = storage

    async def run(self, context: UploadContext) -> UploadContext:
        if context.compressed is None:
            raise ValueError("UploadContext.compressed must be set before upload")
        if not context.scan_id:
            raise ValueError("UploadContext.scan_id must be set before upload")
        stored = await self._storage.upload_scan_image(
            context.user_id, context.scan_id, context.compressed.uri
        )
        context.storage_path = stored.storage_path
        context.download_url = stored.download_url
        Log.info(f"Uploaded image for scan {context.scan_id} to {stored.storage_path}")
        return context


class CreateScanRecordStep(UploadStep):
    name = "create record"

    def __init__(self, store: BaseScanDocumentStore) -> None:
        self._store = store

    async def run(self, context: UploadContext) -> UploadContext:
        if not context.storage_path:
            raise ValueError("UploadContext.storage_path must be set before record creation")
        await self._store.create_scan_document(
            ScanRecord(
                scan_id=context.scan_id,
                user_id=context.user_id,
                image_path=context.storage_path,
                download_url=context.download_url,
                status=ScanStatus.PENDING_ANALYSIS,
                captured_at=context.asset.captured_at,
            )
        )
        Log.info(f"Created scan record {context.scan_id} for user {context.user_id}")
        return context
