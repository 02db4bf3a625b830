from abc import ABC, abstractmethod
from enum import Enum

from dermascan.scans.models import ScanAsset


class ImageSourceKind(str, Enum):
    CAMERA = "camera"
    LIBRARY = "library"


class BaseImageSource(ABC):
    """Contract for the camera / media library picker."""

    @abstractmethod
    async def request_permission(self, source: ImageSourceKind) -> bool:
        """Return True when access to the source is granted."""

    @abstractmethod
    async def acquire(self, source: ImageSourceKind) -> ScanAsset | None:
        """Return the chosen image, or None when the user cancelled."""
