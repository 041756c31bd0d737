"""
Listing client for the advocate directory.

Drives ``GET /advocates`` the way the directory page does: search input is
debounced, sort-header clicks and page changes request immediately, and the
view state is only ever taken from the newest request. Each request carries a
monotonic sequence number; a response that arrives after a newer request was
issued is dropped instead of overwriting fresher rows.

Example Usage:
    client = AdvocateListingClient(base_url="http://localhost:8000")
    await client.mount()
    await client.on_search_input("anxiety")
    await client.on_sort("lastName")
    await client.go_to_page(2)
    await client.aclose()
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from services.advocate_directory.schemas.advocates import SortField, SortOrder
from shared.logger import get_logger

logger = get_logger(component="listing_client")

DEFAULT_DEBOUNCE_SECONDS = 0.3


@dataclass
class ListingState:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0
    loading: bool = False
    error: Optional[str] = None
    search: str = ""
    sort_by: SortField = SortField.FIRST_NAME
    sort_order: SortOrder = SortOrder.ASC


class Debouncer:
    """
    Runs the most recently scheduled action once ``delay`` seconds pass
    quietly. Cancelling only drops an action that is still waiting; one that
    has already fired runs to completion.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._waiting = False

    @property
    def pending(self) -> Optional[asyncio.Task]:
        if self._waiting and self._task is not None and not self._task.done():
            return self._task
        return None

    def schedule(self, action: Callable[[], Awaitable[Any]]) -> asyncio.Task:
        self.cancel()
        self._waiting = True
        self._task = asyncio.create_task(self._run(action))
        return self._task

    def cancel(self) -> None:
        task = self.pending
        if task is not None:
            task.cancel()
        self._waiting = False

    async def _run(self, action: Callable[[], Awaitable[Any]]) -> None:
        await asyncio.sleep(self.delay)
        self._waiting = False
        await action()


class AdvocateListingClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        limit: int = 10,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        endpoint: str = "/advocates",
    ):
        if http_client is None and base_url is None:
            raise ValueError("Either base_url or http_client is required")
        self._http = http_client or httpx.AsyncClient(base_url=base_url)
        self._debouncer = Debouncer(debounce_seconds)
        self._latest_seq = 0
        self.endpoint = endpoint
        self.state = ListingState(limit=limit)

    @property
    def pending_search(self) -> Optional[asyncio.Task]:
        return self._debouncer.pending

    @property
    def can_go_previous(self) -> bool:
        return self.state.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.state.page < self.state.total_pages

    async def mount(self) -> bool:
        return await self.fetch(page=1)

    async def on_search_input(self, text: str) -> Optional[asyncio.Task]:
        """Returns the scheduled request task, or None when it ran immediately."""
        self.state.search = text
        self._debouncer.cancel()
        if not text:
            # cleared input skips the debounce
            await self.fetch(page=1)
            return None
        return self._debouncer.schedule(lambda: self.fetch(page=1, search=text))

    async def on_sort(self, sort_field: Union[SortField, str]) -> bool:
        sort_field = SortField(sort_field)
        if self.state.sort_by == sort_field:
            self.state.sort_order = SortOrder.DESC if self.state.sort_order == SortOrder.ASC else SortOrder.ASC
        else:
            self.state.sort_by = sort_field
            self.state.sort_order = SortOrder.ASC
        self._debouncer.cancel()
        return await self.fetch(page=1)

    async def go_to_page(self, page: int) -> bool:
        if page < 1 or page > max(self.state.total_pages, 1):
            return False
        return await self.fetch(page=page)

    def _request_params(self, page: int, search: str) -> Dict[str, Any]:
        params = {
            "sortBy": self.state.sort_by.value,
            "sortOrder": self.state.sort_order.value,
            "page": page,
            "limit": self.state.limit,
        }
        if search:
            params["search"] = search
        return params

    async def fetch(self, page: int = 1, search: Optional[str] = None) -> bool:
        """
        Request one page and merge it into the state.

        Returns True when the response was applied, False when it failed or
        was discarded as stale.
        """
        search = self.state.search if search is None else search
        params = self._request_params(page, search)

        self._latest_seq += 1
        seq = self._latest_seq
        self.state.loading = True

        try:
            response = await self._http.get(self.endpoint, params=params)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error fetching advocates", error=str(e), seq=seq)
            if seq == self._latest_seq:
                self.state.loading = False
                self.state.error = "Failed to fetch advocates"
            return False

        if seq < self._latest_seq:
            logger.debug("Discarding stale advocates response", seq=seq, latest_seq=self._latest_seq)
            return False

        self.state.loading = False
        if response.status_code != 200:
            message = payload.get("error") if isinstance(payload, dict) else None
            self.state.error = message or f"Request failed with status {response.status_code}"
            logger.error("Advocates request failed", status_code=response.status_code, error=self.state.error)
            return False

        try:
            pagination = payload["pagination"]
            rows = payload["data"]
            page = pagination["page"]
            limit = pagination["limit"]
            total = pagination["total"]
            total_pages = pagination["totalPages"]
        except (KeyError, TypeError) as e:
            logger.error("Unexpected advocates response", error=repr(e), seq=seq)
            self.state.error = "Failed to fetch advocates"
            return False

        self.state.rows = rows
        self.state.page = page
        self.state.limit = limit
        self.state.total = total
        self.state.total_pages = total_pages
        self.state.error = None
        return True

    async def aclose(self) -> None:
        self._debouncer.cancel()
        await self._http.aclose()
