import mimetypes
from pathlib import Path

from dermascan.acquisition.base import BaseImageSource, ImageSourceKind
from dermascan.scans.models import ScanAsset


class FileImageSource(BaseImageSource):
    """Serves a local image file as if it was picked from the library.

    The camera source is never granted: there is no device to capture from.
    A missing file behaves like a cancelled picker.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    async def request_permission(self, source: ImageSourceKind) -> bool:
        return source is ImageSourceKind.LIBRARY

    async def acquire(self, source: ImageSourceKind) -> ScanAsset | None:
        if not self._path.is_file():
            return None
        mime_type, _ = mimetypes.guess_type(self._path.name)
        return ScanAsset(uri=str(self._path), mime_type=mime_type)
