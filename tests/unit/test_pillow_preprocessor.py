from pathlib import Path

import pytest
from PIL import Image

from dermascan.preprocessing.exceptions import PreprocessError
from dermascan.preprocessing.pillow_adapter import PillowImagePreprocessor
from dermascan.scans.models import CompressedImage, ImageFormat, ScanAsset


class TestCompress:
    def test_returns_jpeg_at_policy_quality(self, sample_jpeg: Path, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)

        result = preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

        assert result.format is ImageFormat.JPEG
        assert result.quality == 0.75
        assert Path(result.uri).parent == tmp_path
        with Image.open(result.uri) as img:
            assert img.format == "JPEG"
            assert img.size == (64, 48)

    def test_converts_alpha_images_to_rgb(self, sample_rgba_png: Path, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)

        result = preprocessor.compress(ScanAsset(uri=str(sample_rgba_png)))

        with Image.open(result.uri) as img:
            assert img.mode == "RGB"

    def test_does_not_modify_source(self, sample_jpeg: Path, tmp_path: Path) -> None:
        before = sample_jpeg.read_bytes()
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)

        result = preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

        assert result.uri != str(sample_jpeg)
        assert sample_jpeg.read_bytes() == before

    def test_uses_configured_quality(self, sample_jpeg: Path, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(quality=0.4, tmp_dir=tmp_path)

        result = preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

        assert result.quality == 0.4


class TestCompressFailures:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)

        with pytest.raises(PreprocessError, match="not found"):
            preprocessor.compress(ScanAsset(uri=str(tmp_path / "missing.jpg")))

    def test_unreadable_file_raises(self, not_an_image: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        preprocessor = PillowImagePreprocessor(tmp_dir=out_dir)

        with pytest.raises(PreprocessError, match="Could not compress"):
            preprocessor.compress(ScanAsset(uri=str(not_an_image)))

        assert list(out_dir.iterdir()) == []

    def test_oversized_image_raises_and_cleans_up(
        self, sample_jpeg: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        preprocessor = PillowImagePreprocessor(tmp_dir=out_dir)

        with pytest.raises(PreprocessError, match="Could not compress"):
            preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

        assert list(out_dir.iterdir()) == []

    def test_unsupported_format_raises(self, sample_jpeg: Path, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(image_format="webp", tmp_dir=tmp_path)

        with pytest.raises(PreprocessError, match="Unsupported image format"):
            preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

    def test_rejects_out_of_range_quality(self) -> None:
        with pytest.raises(ValueError, match="quality"):
            PillowImagePreprocessor(quality=1.2)


class TestDiscard:
    def test_removes_transient_file(self, sample_jpeg: Path, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)
        result = preprocessor.compress(ScanAsset(uri=str(sample_jpeg)))

        preprocessor.discard(result)

        assert not Path(result.uri).exists()

    def test_missing_file_is_ignored(self, tmp_path: Path) -> None:
        preprocessor = PillowImagePreprocessor(tmp_dir=tmp_path)
        image = CompressedImage(
            uri=str(tmp_path / "gone.jpg"), format=ImageFormat.JPEG, quality=0.75
        )

        preprocessor.discard(image)  # Should not raise
