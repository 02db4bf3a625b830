from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture()
def sample_jpeg(tmp_path: Path) -> Path:
    """Write a small RGB JPEG to disk."""
    path = tmp_path / "capture.jpg"
    Image.new("RGB", (64, 48), color=(200, 120, 90)).save(path, format="JPEG")
    return path


@pytest.fixture()
def sample_rgba_png(tmp_path: Path) -> Path:
    """Write a small PNG with an alpha channel to disk."""
    path = tmp_path / "library.png"
    Image.new("RGBA", (32, 32), color=(10, 20, 30, 128)).save(path, format="PNG")
    return path


@pytest.fixture()
def not_an_image(tmp_path: Path) -> Path:
    path = tmp_path / "notes.jpg"
    path.write_bytes(b"this is not an image")
    return path
