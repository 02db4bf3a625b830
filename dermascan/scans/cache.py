"""Client-side paginated cache of a single user's scans.

State machine: disabled -> loading -> ready, then loading/ready on every
fetch, empty after clear_cache(), and loading/ready again when re-primed.
A failed fetch keeps the last ready snapshot; there is no failure state.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from dermascan.database.base import BaseScanDocumentStore
from dermascan.logging.logger import Log
from dermascan.notifications.base import BaseNotifier
from dermascan.scans.exceptions import FetchFailed
from dermascan.scans.models import ScanRecord


class CacheStatus(str, Enum):
    DISABLED = "disabled"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"


@dataclass(frozen=True)
class CacheState:
    """Read-only snapshot of the cache for rendering."""

    enabled: bool
    is_loading: bool
    status: CacheStatus
    total_count: int | None = None
    pages: dict[int, list[ScanRecord]] = field(default_factory=dict)

    @property
    def latest_scan(self) -> ScanRecord | None:
        first_page = self.pages.get(1)
        return first_page[0] if first_page else None


class ScanCache:
    """Paginated view of a user's scans with a derived latest scan.

    Pages are snapshots: fetching a page again replaces it. Nothing is
    patched locally after a mutation; callers clear and re-fetch instead.
    The cache is inert while disabled. Concurrent operations are not
    queued, the last one to finish wins.
    """

    def __init__(
        self,
        store: BaseScanDocumentStore,
        notifier: BaseNotifier,
        user_id: str | None,
        *,
        initial_page: int = 1,
        page_size: int = 1,
    ) -> None:
        if initial_page < 1 or page_size < 1:
            raise ValueError("initial_page and page_size must be >= 1")
        self._store = store
        self._notifier = notifier
        self._user_id = user_id
        self._initial_page = initial_page
        self._page_size = page_size
        self._enabled = False
        self._in_flight = 0
        self._pages: dict[int, list[ScanRecord]] = {}
        self._stored_page_size: int | None = None
        self._total_count: int | None = None
        self.last_error: FetchFailed | None = None

    @classmethod
    async def open(
        cls,
        store: BaseScanDocumentStore,
        notifier: BaseNotifier,
        user_id: str | None,
        *,
        enabled: bool,
        initial_page: int = 1,
        page_size: int = 1,
    ) -> "ScanCache":
        """Create a cache and apply the enabled gate, priming it when enabled."""
        cache = cls(
            store,
            notifier,
            user_id,
            initial_page=initial_page,
            page_size=page_size,
        )
        await cache.set_enabled(enabled)
        return cache

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def total_count(self) -> int | None:
        return self._total_count

    @property
    def pages(self) -> dict[int, list[ScanRecord]]:
        return {page: list(records) for page, records in self._pages.items()}

    @property
    def latest_scan(self) -> ScanRecord | None:
        first_page = self._pages.get(1)
        return first_page[0] if first_page else None

    @property
    def records(self) -> list[ScanRecord]:
        """All cached records, in page order."""
        return [r for page in sorted(self._pages) for r in self._pages[page]]

    @property
    def status(self) -> CacheStatus:
        if not self._enabled:
            return CacheStatus.DISABLED
        if self.is_loading:
            return CacheStatus.LOADING
        if not self._pages and self._total_count is None:
            return CacheStatus.EMPTY
        return CacheStatus.READY

    @property
    def state(self) -> CacheState:
        return CacheState(
            enabled=self._enabled,
            is_loading=self.is_loading,
            status=self.status,
            total_count=self._total_count,
            pages=self.pages,
        )

    async def set_enabled(self, enabled: bool) -> None:
        """Apply the external gate. Enabling fetches the initial page once."""
        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not enabled:
            self.clear_cache()
            return
        Log.debug(
            f"Scan cache enabled for user {self._user_id}, "
            f"priming page {self._initial_page}"
        )
        await self.fetch_page(self._initial_page, self._page_size)

    async def fetch_page(self, page: int, page_size: int) -> list[ScanRecord]:
        """Fetch one page and store it, replacing any previous copy.

        On failure the previously stored page is returned and kept.
        """
        if page < 1 or page_size < 1:
            raise ValueError(f"page and page_size must be >= 1, got {page}/{page_size}")
        if not self._enabled or self._user_id is None:
            return []

        self._in_flight += 1
        try:
            records = await self._store.list_scans(self._user_id, page, page_size)
        except Exception as exc:
            self._fetch_failed(FetchFailed(f"Fetching page {page} failed: {exc}"))
            if page_size != self._stored_page_size:
                return []
            return list(self._pages.get(page, []))
        finally:
            self._in_flight -= 1

        if not self._enabled:
            return list(records)
        if self._stored_page_size is not None and page_size != self._stored_page_size:
            # Page boundaries moved; other pages no longer line up.
            self._pages.clear()
        self._stored_page_size = page_size
        self._pages[page] = list(records)
        self.last_error = None
        Log.debug(f"Cached page {page} ({len(records)} scans) for user {self._user_id}")
        return list(records)

    def clear_cache(self) -> None:
        """Drop every page and the total count. No network call."""
        self._pages.clear()
        self._stored_page_size = None
        self._total_count = None

    async def fetch_total_count(self) -> int | None:
        """Refresh the total from the backend; keeps the previous value on failure."""
        if not self._enabled or self._user_id is None:
            return self._total_count

        self._in_flight += 1
        try:
            count = await self._store.count_scans(self._user_id)
        except Exception as exc:
            self._fetch_failed(FetchFailed(f"Counting scans failed: {exc}"))
            return self._total_count
        finally:
            self._in_flight -= 1

        if self._enabled:
            self._total_count = count
            self.last_error = None
        return count

    def total_pages(self, page_size: int) -> int | None:
        if self._total_count is None:
            return None
        return math.ceil(self._total_count / page_size)

    def has_next_page(self, page: int, page_size: int) -> bool:
        total_pages = self.total_pages(page_size)
        if total_pages is not None:
            return page < total_pages
        # Unknown total: a full page suggests there may be more.
        return len(self._pages.get(page, [])) == page_size

    def _fetch_failed(self, error: FetchFailed) -> None:
        self.last_error = error
        Log.warning(f"Scan cache for user {self._user_id}: {error}")
        self._notifier.notify(
            "Unable to Load Scans",
            "We could not refresh your scans. Showing the last loaded results.",
        )
