from abc import ABC, abstractmethod
from pathlib import Path

from dermascan.logging.logger import Log
from dermascan.scans.models import CompressedImage, ScanAsset


class BaseImagePreprocessor(ABC):
    """Contract for all image preprocessing adapters."""

    @abstractmethod
    def compress(self, asset: ScanAsset) -> CompressedImage:
        """Re-encode a captured or selected image into an upload-ready file.

        Args:
            asset: Local image reference from the acquisition source.

        Returns:
            CompressedImage pointing at a transient local file.

        Raises:
            PreprocessError: if the source is unreadable or the target
                             format is unsupported.
        """

    def discard(self, image: CompressedImage) -> None:
        """Remove the transient file behind a compressed image."""
        try:
            Path(image.uri).unlink(missing_ok=True)
        except OSError as exc:
            Log.warning(f"Could not remove transient image {image.uri}: {exc}")
