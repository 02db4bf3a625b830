import asyncio
import shutil
from pathlib import Path

from dermascan.logging.logger import Log
from dermascan.scans.models import scan_image_path
from dermascan.storage.base import BaseObjectStorage, StoredImage
from dermascan.storage.exceptions import StorageError


class LocalObjectStorage(BaseObjectStorage):
    """Stores scan images under a local files root."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None, public_base_url: str = "") -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT
        self._public_base_url = public_base_url.rstrip("/")

    async def upload_scan_image(
        self,
        user_id: str,
        scan_id: str,
        local_uri: str,
    ) -> StoredImage:
        storage_path = scan_image_path(user_id, scan_id)
        target = self._files_root / storage_path
        try:
            await asyncio.to_thread(self._copy, Path(local_uri), target)
        except OSError as exc:
            raise StorageError(f"Failed to store {storage_path}: {exc}") from exc
        Log.info(f"Stored scan image {storage_path}")
        return StoredImage(
            storage_path=storage_path,
            download_url=self._download_url(target, storage_path),
        )

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)

    def _download_url(self, target: Path, storage_path: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{storage_path}"
        return target.resolve().as_uri()
