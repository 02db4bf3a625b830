from dermascan.auth.base import BaseProfileCompletionGuard
from dermascan.scans.cache import ScanCache
from dermascan.scans.models import ScanRecord


class ScanHistoryController:
    """Scan history screen: pages through the user's scans, newest first."""

    def __init__(
        self,
        guard: BaseProfileCompletionGuard,
        cache: ScanCache,
        page_size: int = 10,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._guard = guard
        self._cache = cache
        self._page_size = page_size
        self._current_page = 0

    @property
    def records(self) -> list[ScanRecord]:
        return self._cache.records

    @property
    def total_count(self) -> int | None:
        return self._cache.total_count

    @property
    def is_loading(self) -> bool:
        return self._cache.is_loading

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def has_more(self) -> bool:
        if self._current_page == 0:
            return self._cache.enabled
        return self._cache.has_next_page(self._current_page, self._page_size)

    async def open(self) -> None:
        """Enable the cache if the profile allows it and load the first page.

        The cache is expected to be primed with page 1 at this screen's page
        size, so enabling it already loads the first page. A failed priming
        fetch is not retried here; load_next_page() retries on demand.
        """
        was_enabled = self._cache.enabled
        await self._cache.set_enabled(self._guard.is_profile_complete)
        if not self._cache.enabled:
            return
        await self._cache.fetch_total_count()
        if 1 in self._cache.pages:
            self._current_page = 1
        elif was_enabled:
            await self.load_next_page()

    async def refresh(self) -> None:
        self._cache.clear_cache()
        self._current_page = 0
        await self._cache.fetch_total_count()
        await self.load_next_page()

    async def load_next_page(self) -> list[ScanRecord]:
        """Fetch the page after the last loaded one; no-op when exhausted."""
        if not self.has_more:
            return []
        page = self._current_page + 1
        records = await self._cache.fetch_page(page, self._page_size)
        if self._cache.last_error is None:
            self._current_page = page
        return records
