import os
import tempfile
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from dermascan.preprocessing.base import BaseImagePreprocessor
from dermascan.preprocessing.exceptions import PreprocessError
from dermascan.scans.models import CompressedImage, ImageFormat, ScanAsset


class PillowImagePreprocessor(BaseImagePreprocessor):
    """Normalizes images to RGB JPEG at a fixed quality using Pillow."""

    DEFAULT_QUALITY = 0.75

    def __init__(
        self,
        quality: float = DEFAULT_QUALITY,
        image_format: str = ImageFormat.JPEG.value,
        tmp_dir: Path | None = None,
    ) -> None:
        if not 0.0 < quality <= 1.0:
            raise ValueError(f"quality must be in (0, 1], got {quality}")
        self._quality = quality
        self._format = image_format.upper()
        self._tmp_dir = tmp_dir

    def compress(self, asset: ScanAsset) -> CompressedImage:
        target = self._resolve_format()
        source = Path(asset.uri)
        if not source.is_file():
            raise PreprocessError(f"Image not found: {source}")

        fd, out_name = tempfile.mkstemp(
            prefix="scan-",
            suffix=".jpg",
            dir=str(self._tmp_dir) if self._tmp_dir is not None else None,
        )
        os.close(fd)
        out_path = Path(out_name)
        try:
            with Image.open(source) as img:
                normalized = ImageOps.exif_transpose(img)
                if normalized.mode != "RGB":
                    normalized = normalized.convert("RGB")
                normalized.save(
                    out_path,
                    format=target.value,
                    quality=round(self._quality * 100),
                    optimize=True,
                )
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            out_path.unlink(missing_ok=True)
            raise PreprocessError(f"Could not compress {source}: {exc}") from exc

        return CompressedImage(uri=str(out_path), format=target, quality=self._quality)

    def _resolve_format(self) -> ImageFormat:
        try:
            return ImageFormat(self._format)
        except ValueError as exc:
            raise PreprocessError(
                f"Unsupported image format '{self._format}'. "
                f"Choose from: {[f.value for f in ImageFormat]}"
            ) from exc
