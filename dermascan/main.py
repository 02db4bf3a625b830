import argparse
import asyncio
from pathlib import Path

from dermascan.acquisition.base import ImageSourceKind
from dermascan.acquisition.file_source import FileImageSource
from dermascan.auth.static import StaticAuthProvider, StaticProfileGuard
from dermascan.config.settings import Settings
from dermascan.database.connection import Database
from dermascan.database.repositories.scan_repository import PostgresScanDocumentStore
from dermascan.logging.logger import Log
from dermascan.scans.models import AuthUser
from dermascan.screens.factory import build_home_screen, build_services


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dermascan",
        description="Upload a local skin photo as a scan and show the latest scan.",
    )
    parser.add_argument("image", type=Path, help="Path to the image to upload")
    parser.add_argument("--user", required=True, help="User id that owns the scan")
    parser.add_argument("--email", default=None)
    return parser.parse_args(argv)


async def run(settings: Settings, image: Path, user: AuthUser) -> int:
    """Open the store -> build the home screen -> upload -> report the latest scan."""
    database = Database(settings) if settings.document_store.lower() == "postgres" else None
    if database is not None:
        await database.open()

    try:
        services = build_services(settings, database=database)
        if isinstance(services.store, PostgresScanDocumentStore):
            await services.store.ensure_schema()

        notifier = services.notifier
        auth = StaticAuthProvider(user)
        guard = StaticProfileGuard(notifier, complete=True)
        home = await build_home_screen(
            settings, services, auth, guard, FileImageSource(image)
        )
        Log.info(f"Welcome, {home.greeting_name}")

        result = await home.pick_image(ImageSourceKind.LIBRARY)
        if result is None:
            return 1

        latest = home.latest_scan
        if latest is not None:
            Log.info(
                f"Latest scan {latest.scan_id}: status {latest.status_label}, "
                f"captured {home.latest_scan_timestamp}"
            )
        return 0
    finally:
        if database is not None:
            await database.close()


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> configure logging -> run the upload flow."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    user = AuthUser(uid=args.user, email=args.email)
    return asyncio.run(run(settings, args.image, user))


if __name__ == "__main__":
    raise SystemExit(main())
