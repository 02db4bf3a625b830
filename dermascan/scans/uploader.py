from collections.abc import Sequence

from dermascan.auth.base import BaseAuthProvider
from dermascan.database.base import BaseScanDocumentStore
from dermascan.logging.logger import Log
from dermascan.notifications.base import BaseNotifier
from dermascan.preprocessing.base import BaseImagePreprocessor
from dermascan.scans.exceptions import AuthenticationRequired, ScanError, UploadFailed
from dermascan.scans.models import ScanAsset, UploadScanResult
from dermascan.scans.pipeline import UploadContext, UploadStep
from dermascan.scans.steps import (
    AllocateScanIdStep,
    CompressImageStep,
    CreateScanRecordStep,
    UploadImageStep,
)
from dermascan.storage.base import BaseObjectStorage


class ScanUploader:
    """Turns a captured image into a stored binary plus a scan record.

    Pipeline: compress -> allocate id -> upload image -> create record.
    The record is written only after the image upload succeeded, so a
    failure can leave an orphaned binary but never a record pointing at a
    missing one. Concurrent uploads are allowed and run independently.
    """

    def __init__(
        self,
        auth: BaseAuthProvider,
        preprocessor: BaseImagePreprocessor,
        notifier: BaseNotifier,
        steps: Sequence[UploadStep],
    ) -> None:
        self._auth = auth
        self._preprocessor = preprocessor
        self._notifier = notifier
        self._steps = list(steps)
        self._in_flight = 0
        self.last_error: ScanError | None = None

    @property
    def is_uploading(self) -> bool:
        return self._in_flight > 0

    async def upload_scan(self, asset: ScanAsset) -> UploadScanResult | None:
        """Upload one scan. Returns None on any failure, after notifying the user."""
        user = self._auth.current_user()
        if user is None:
            self.last_error = AuthenticationRequired("No signed-in user")
            Log.warning("Scan upload requested without a signed-in user")
            self._notifier.notify(
                "Authentication Required", "Please sign in to upload a scan."
            )
            return None

        context = UploadContext(asset=asset, user_id=user.uid)
        self._in_flight += 1
        try:
            context = await self._run_steps(context)
        except UploadFailed as exc:
            self.last_error = exc
            Log.error(f"Upload scan failed for user {user.uid}: {exc}")
            self._notifier.notify(
                "Upload Failed", "We could not upload your scan. Please try again."
            )
            return None
        finally:
            self._in_flight -= 1
            if context.compressed is not None:
                self._preprocessor.discard(context.compressed)

        self.last_error = None
        # Analysis is triggered elsewhere; the record stays pending_analysis.
        return UploadScanResult(
            scan_id=context.scan_id,
            storage_path=context.storage_path,
            download_url=context.download_url,
        )

    async def _run_steps(self, context: UploadContext) -> UploadContext:
        for step in self._steps:
            try:
                context = await step.run(context)
            except Exception as exc:
                raise UploadFailed(f"{step.name} step failed: {exc}") from exc
        return context


def build_uploader(
    auth: BaseAuthProvider,
    preprocessor: BaseImagePreprocessor,
    storage: BaseObjectStorage,
    store: BaseScanDocumentStore,
    notifier: BaseNotifier,
) -> ScanUploader:
    """Build a ScanUploader with the standard step order."""
    steps = [
        CompressImageStep(preprocessor),
        AllocateScanIdStep(),
        UploadImageStep(storage),
        CreateScanRecordStep(store),
    ]
    return ScanUploader(auth, preprocessor, notifier, steps)
