from abc import ABC, abstractmethod
from dataclasses import dataclass

from dermascan.scans.models import CompressedImage, ScanAsset


@dataclass(slots=True)
class UploadContext:
    asset: ScanAsset
    user_id: str
    compressed: CompressedImage | None = None
    scan_id: str = ""
    storage_path: str = ""
    download_url: str = ""


class UploadStep(ABC):
    name: str = "upload step"

    @abstractmethod
    async def run(self, context: UploadContext) -> UploadContext:
        raise NotImplementedError
