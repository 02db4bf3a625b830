from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dermascan.acquisition.base import ImageSourceKind
from dermascan.acquisition.file_source import FileImageSource
from dermascan.auth.static import StaticAuthProvider, StaticProfileGuard
from dermascan.notifications.log_notifier import LogNotifier
from dermascan.scans.models import AuthUser


class TestStaticAuthProvider:
    def test_sign_in_and_out(self) -> None:
        auth = StaticAuthProvider()
        assert auth.current_user() is None

        auth.sign_in(AuthUser(uid="u1"))
        assert auth.current_user() == AuthUser(uid="u1")

        auth.sign_out()
        assert auth.current_user() is None


class TestStaticProfileGuard:
    def test_complete_profile_passes_silently(self) -> None:
        notifier = MagicMock()
        guard = StaticProfileGuard(notifier, complete=True)

        assert guard.ensure_profile_complete("upload a scan") is True
        notifier.notify.assert_not_called()

    def test_incomplete_profile_prompts(self) -> None:
        notifier = MagicMock()
        guard = StaticProfileGuard(notifier)

        assert guard.ensure_profile_complete("upload a scan") is False
        notifier.notify.assert_called_once_with(
            "Complete Your Profile",
            "Please complete your demographic profile to upload a scan.",
        )

    def test_mark_complete(self) -> None:
        guard = StaticProfileGuard(MagicMock())
        guard.mark_complete()
        assert guard.is_profile_complete is True


class TestLogNotifier:
    def test_records_messages(self) -> None:
        notifier = LogNotifier()

        notifier.notify("Upload Failed", "try again")
        notifier.notify("Scan Uploaded", "done")

        assert notifier.messages == [("Upload Failed", "try again"), ("Scan Uploaded", "done")]


class TestFileImageSource:
    @pytest.mark.asyncio
    async def test_library_is_granted(self, sample_jpeg: Path) -> None:
        source = FileImageSource(sample_jpeg)

        assert await source.request_permission(ImageSourceKind.LIBRARY) is True
        assert await source.request_permission(ImageSourceKind.CAMERA) is False

    @pytest.mark.asyncio
    async def test_acquires_file(self, sample_jpeg: Path) -> None:
        asset = await FileImageSource(sample_jpeg).acquire(ImageSourceKind.LIBRARY)

        assert asset is not None
        assert asset.uri == str(sample_jpeg)
        assert asset.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_missing_file_acts_as_cancel(self, tmp_path: Path) -> None:
        source = FileImageSource(tmp_path / "missing.jpg")

        assert await source.acquire(ImageSourceKind.LIBRARY) is None
