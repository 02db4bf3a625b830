from dataclasses import dataclass

from dermascan.acquisition.base import BaseImageSource
from dermascan.auth.base import BaseAuthProvider, BaseProfileCompletionGuard
from dermascan.config.settings import Settings
from dermascan.database.base import BaseScanDocumentStore
from dermascan.database.connection import Database
from dermascan.database.factory import ScanDocumentStoreFactory
from dermascan.notifications.base import BaseNotifier
from dermascan.notifications.log_notifier import LogNotifier
from dermascan.preprocessing.base import BaseImagePreprocessor
from dermascan.preprocessing.factory import ImagePreprocessorFactory
from dermascan.scans.cache import ScanCache
from dermascan.scans.uploader import build_uploader
from dermascan.screens.history import ScanHistoryController
from dermascan.screens.home import HomeScreenController
from dermascan.storage.base import BaseObjectStorage
from dermascan.storage.factory import StorageFactory


@dataclass(frozen=True)
class ScanServices:
    """Service handles shared by the screens of one session."""

    preprocessor: BaseImagePreprocessor
    storage: BaseObjectStorage
    store: BaseScanDocumentStore
    notifier: BaseNotifier


def build_services(
    settings: Settings,
    database: Database | None = None,
    notifier: BaseNotifier | None = None,
) -> ScanServices:
    """Build the configured adapters."""
    return ScanServices(
        preprocessor=ImagePreprocessorFactory.create(settings),
        storage=StorageFactory.create(settings),
        store=ScanDocumentStoreFactory.create(settings, database),
        notifier=notifier if notifier is not None else LogNotifier(),
    )


async def build_home_screen(
    settings: Settings,
    services: ScanServices,
    auth: BaseAuthProvider,
    guard: BaseProfileCompletionGuard,
    image_source: BaseImageSource,
) -> HomeScreenController:
    """Build the home screen with a cache primed when the profile is complete."""
    user = auth.current_user()
    cache = await ScanCache.open(
        services.store,
        services.notifier,
        user.uid if user is not None else None,
        enabled=guard.is_profile_complete,
        page_size=settings.latest_scan_page_size,
    )
    uploader = build_uploader(
        auth,
        services.preprocessor,
        services.storage,
        services.store,
        services.notifier,
    )
    return HomeScreenController(
        auth=auth,
        guard=guard,
        uploader=uploader,
        cache=cache,
        image_source=image_source,
        notifier=services.notifier,
    )


def build_history_screen(
    settings: Settings,
    services: ScanServices,
    auth: BaseAuthProvider,
    guard: BaseProfileCompletionGuard,
) -> ScanHistoryController:
    """Build the history screen; call open() on it to load the first page."""
    user = auth.current_user()
    cache = ScanCache(
        services.store,
        services.notifier,
        user.uid if user is not None else None,
        page_size=settings.history_page_size,
    )
    return ScanHistoryController(guard, cache, page_size=settings.history_page_size)
