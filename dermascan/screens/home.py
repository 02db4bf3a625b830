from datetime import datetime

from dermascan.acquisition.base import BaseImageSource, ImageSourceKind
from dermascan.auth.base import BaseAuthProvider, BaseProfileCompletionGuard
from dermascan.logging.logger import Log
from dermascan.notifications.base import BaseNotifier
from dermascan.scans.cache import ScanCache
from dermascan.scans.models import ScanRecord, UploadScanResult
from dermascan.scans.uploader import ScanUploader

_PERMISSION_MESSAGES = {
    ImageSourceKind.CAMERA: "Camera access is needed to capture a new scan.",
    ImageSourceKind.LIBRARY: "Media library access is needed to upload a scan.",
}

_UPLOADED_MESSAGES = {
    ImageSourceKind.CAMERA: "Your photo has been uploaded. Analysis will appear shortly.",
    ImageSourceKind.LIBRARY: (
        "Your selected image has been uploaded. Analysis will appear shortly."
    ),
}


class HomeScreenController:
    """Home tab: latest scan card plus the upload flow."""

    def __init__(
        self,
        auth: BaseAuthProvider,
        guard: BaseProfileCompletionGuard,
        uploader: ScanUploader,
        cache: ScanCache,
        image_source: BaseImageSource,
        notifier: BaseNotifier,
    ) -> None:
        self._auth = auth
        self._guard = guard
        self._uploader = uploader
        self._cache = cache
        self._image_source = image_source
        self._notifier = notifier

    @property
    def greeting_name(self) -> str:
        user = self._auth.current_user()
        if user is not None and user.display_name:
            return user.display_name.upper()
        if user is not None and user.email:
            return user.email.split("@")[0]
        return "Explorer"

    @property
    def latest_scan(self) -> ScanRecord | None:
        return self._cache.latest_scan

    @property
    def latest_scan_timestamp(self) -> datetime | None:
        scan = self._cache.latest_scan
        return scan.display_timestamp if scan is not None else None

    @property
    def is_loading_scans(self) -> bool:
        return self._cache.is_loading

    @property
    def is_uploading(self) -> bool:
        return self._uploader.is_uploading

    @property
    def upload_disabled(self) -> bool:
        return not self._guard.is_profile_complete or self._uploader.is_uploading

    @property
    def history_disabled(self) -> bool:
        return not self._guard.is_profile_complete

    async def sync_profile_gate(self) -> None:
        """Push the current profile-completeness flag into the scan cache."""
        await self._cache.set_enabled(self._guard.is_profile_complete)

    async def pick_image(self, source: ImageSourceKind) -> UploadScanResult | None:
        """Acquire an image from the source, upload it and refresh the cache."""
        if not self._guard.ensure_profile_complete("upload a scan"):
            return None
        try:
            if not await self._image_source.request_permission(source):
                self._notifier.notify("Permission Required", _PERMISSION_MESSAGES[source])
                return None
            asset = await self._image_source.acquire(source)
        except Exception as exc:
            Log.error(f"Image selection error: {exc}")
            self._notifier.notify(
                "Upload Failed", "We were unable to access your media. Please try again."
            )
            return None

        if asset is None:
            return None

        uploaded = await self._uploader.upload_scan(asset)
        if uploaded is None:
            return None

        await self.refresh_after_upload()
        self._notifier.notify("Scan Uploaded", _UPLOADED_MESSAGES[source])
        return uploaded

    async def refresh_after_upload(self) -> None:
        """Clear first, then re-count, then re-fetch the latest scan."""
        self._cache.clear_cache()
        await self._cache.fetch_total_count()
        await self._cache.fetch_page(1, 1)

    def view_history(self) -> bool:
        return self._guard.ensure_profile_complete("view scan history")
