"""Client-filtered mode — load a collection once, then filter/sort/slice in memory."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic

from storefront_admin.application.interfaces import PageSource
from storefront_admin.application.table.columns import ColumnDefinition, find_column
from storefront_admin.domain.entities import (
    E,
    ErrorKind,
    FetchFailure,
    PageOutcome,
    PageRequest,
    PageResult,
    QueryMode,
    SessionCredentials,
    compute_page_count,
)
from storefront_admin.domain.exceptions import BackendRequestError, ConfigurationError

logger = logging.getLogger(__name__)

RecordLoader = Callable[[SessionCredentials | None], Awaitable[list[Any]]]


def _matches(value: Any, needle: str) -> bool:
    """Case-insensitive substring match; lists match when any element does."""
    if value is None:
        return False
    if isinstance(value, (list, tuple)):
        return any(_matches(item, needle) for item in value)
    return needle in str(value).casefold()


def apply_client_query(
    records: Sequence[E],
    columns: Sequence[ColumnDefinition],
    request: PageRequest,
) -> PageResult[E]:
    """Filter, sort and slice ``records`` for one page.

    Filters on unknown columns are ignored. Sorting is stable and always puts
    missing values last, whichever the direction. ``total_items`` counts the
    rows left after filtering.
    """
    rows = list(records)

    for column_filter in request.column_filters:
        column = find_column(columns, column_filter.column_id)
        if column is None:
            logger.debug("Ignoring filter on unknown column '%s'", column_filter.column_id)
            continue
        needle = column_filter.value.casefold()
        rows = [row for row in rows if _matches(column.value(row), needle)]

    sort = request.primary_sort
    if sort is not None:
        column = find_column(columns, sort.column_id)
        if column is not None and column.sortable:
            keyed = [(column.sort_key(row), row) for row in rows]
            present = [pair for pair in keyed if pair[0] is not None]
            missing = [row for key, row in keyed if key is None]
            present.sort(key=lambda pair: pair[0], reverse=sort.descending)
            rows = [row for _, row in present] + missing

    total_items = len(rows)
    page_count = compute_page_count(total_items, request.page_size)
    if request.fetches_all:
        page = rows
    else:
        start = request.page_index * request.page_size
        page = rows[start:start + request.page_size]
    return PageResult(data=page, page_count=page_count, total_items=total_items)


def failure_from_exception(exc: Exception) -> FetchFailure:
    """Translate a domain exception raised by a loader into a FetchFailure."""
    if isinstance(exc, ConfigurationError):
        return FetchFailure(error=exc.message, kind=ErrorKind.CONFIGURATION)
    if isinstance(exc, BackendRequestError):
        kind = ErrorKind.TRANSIENT if exc.retryable else ErrorKind.BACKEND
        return FetchFailure(error=exc.message, kind=kind)
    return FetchFailure(error=f"An unexpected error occurred: {exc}", kind=ErrorKind.TRANSIENT)


class ClientFilteredPageSource(PageSource[E], Generic[E]):
    """PageSource over a backend without server-side paging.

    ``load`` pulls the whole collection through the loader and caches it;
    ``slice`` answers page requests from the cache. ``fetch_page`` does both,
    so a stateless caller always sees fresh data.
    """

    mode = QueryMode.CLIENT

    def __init__(
        self,
        loader: RecordLoader,
        columns: Sequence[ColumnDefinition],
        *,
        source_name: str = "records",
    ):
        self._loader = loader
        self._columns = tuple(columns)
        self._source_name = source_name
        self._records: list[E] | None = None
        self._pending: asyncio.Future | None = None

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    async def load(self, credentials: SessionCredentials | None = None) -> FetchFailure | None:
        """Fetch every record; returns a FetchFailure instead of raising.

        A call made while a load is in flight waits for that load instead of
        starting a second one. A caller that times out does not cancel it.
        """
        if self._pending is None or self._pending.done():
            self._pending = asyncio.ensure_future(self._load_all(credentials))
        return await asyncio.shield(self._pending)

    async def _load_all(self, credentials: SessionCredentials | None) -> FetchFailure | None:
        try:
            records = await self._loader(credentials)
        except (ConfigurationError, BackendRequestError) as exc:
            logger.warning("Loading %s failed: %s", self._source_name, exc)
            return failure_from_exception(exc)
        self._records = list(records)
        logger.info("Loaded %d %s for client-side paging", len(self._records), self._source_name)
        return None

    def slice(self, request: PageRequest) -> PageResult[E]:
        return apply_client_query(self._records or [], self._columns, request)

    def invalidate(self) -> None:
        self._records = None

    async def fetch_page(
        self,
        request: PageRequest,
        *,
        credentials: SessionCredentials | None = None,
    ) -> PageOutcome:
        failure = await self.load(credentials)
        if failure is not None:
            return failure
        return self.slice(request)
