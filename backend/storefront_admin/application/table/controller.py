"""Table state controller — owns one table's state and drives its page source.

Every committed state change triggers exactly one fetch (server mode) or
one in-memory re-slice (client mode, after the initial load). Fetches are
stamped with a generation number; a response whose generation is no longer
the latest is dropped, so a slow earlier request can never overwrite the
result of a later one.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Generic

from storefront_admin.application.interfaces import PageSource
from storefront_admin.application.table.client_query import ClientFilteredPageSource
from storefront_admin.application.table.columns import ColumnDefinition, find_column
from storefront_admin.application.table.debounce import Debouncer
from storefront_admin.domain.entities import (
    E,
    ErrorKind,
    FetchFailure,
    FetchStatus,
    PageOutcome,
    PageResult,
    SessionCredentials,
    SortSpec,
    TableState,
)
from storefront_admin.infrastructure.logging.colored_logger import TableActivityLogger

logger = logging.getLogger(__name__)


class TableController(Generic[E]):
    """In-memory state holder for one table instance.

    State is created with defaults, changed only through the setters below
    and discarded with the controller.
    """

    def __init__(
        self,
        source: PageSource[E],
        columns: Sequence[ColumnDefinition],
        *,
        initial_state: TableState | None = None,
        credentials: SessionCredentials | None = None,
        timeout: float = 20.0,
        debounce_seconds: float = 0.3,
        name: str = "table",
    ):
        self._source = source
        self._columns = tuple(columns)
        self._state = initial_state or TableState()
        self._credentials = credentials
        self._timeout = timeout
        self._name = name

        self._visibility: dict[str, bool] = {c.id: True for c in self._columns}
        self._filter_inputs: dict[str, str] = {
            f.column_id: f.value for f in self._state.column_filters
        }
        self._data: list[E] = []
        self._page_count = 0
        self._total_items = 0
        self._status = FetchStatus.IDLE
        self._error: FetchFailure | None = None
        self._generation = 0
        self._fetch_count = 0

        self._debouncer = Debouncer(debounce_seconds)
        self._activity = TableActivityLogger(name)

    # ── Read-only view ──

    @property
    def name(self) -> str:
        return self._name

    @property
    def columns(self) -> tuple[ColumnDefinition, ...]:
        return self._columns

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def data(self) -> list[E]:
        return list(self._data)

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def status(self) -> FetchStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._status == FetchStatus.LOADING

    @property
    def error(self) -> FetchFailure | None:
        return self._error

    @property
    def visibility(self) -> dict[str, bool]:
        return dict(self._visibility)

    @property
    def filter_inputs(self) -> dict[str, str]:
        """Filter text as typed, including keystrokes not yet committed."""
        return dict(self._filter_inputs)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def fetch_count(self) -> int:
        """Number of backend round trips issued so far."""
        return self._fetch_count

    # ── Setters ──

    async def refresh(self) -> None:
        """Re-fetch the current state; client mode reloads the whole collection."""
        if isinstance(self._source, ClientFilteredPageSource):
            self._source.invalidate()
        await self._load()

    async def set_page_index(self, page_index: int) -> bool:
        return await self._commit(self._state.with_page_index(page_index))

    async def set_page_size(self, page_size: int) -> bool:
        """Change the page size; the page index returns to 0."""
        return await self._commit(self._state.with_page_size(page_size))

    async def set_sorting(self, sorting: SortSpec | None) -> bool:
        return await self._commit(self._state.with_sorting(sorting))

    async def toggle_sort(self, column_id: str) -> bool:
        """Cycle a header: unsorted → ascending → descending → ascending."""
        column = find_column(self._columns, column_id)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort toggle on non-sortable column '%s'", column_id)
            return False
        current = self._state.primary_sort
        descending = current is not None and current.column_id == column_id and not current.descending
        return await self.set_sorting(SortSpec(column_id, descending=descending))

    async def set_column_filter(self, column_id: str, value: str) -> bool:
        """Commit a filter immediately; an empty value removes it."""
        self._filter_inputs[column_id] = value
        if not value.strip():
            self._filter_inputs.pop(column_id, None)
        return await self._commit(self._state.with_column_filter(column_id, value))

    def type_filter(self, column_id: str, text: str) -> None:
        """Record a keystroke; the filter commits once typing pauses."""
        self._filter_inputs[column_id] = text

        async def commit() -> None:
            await self.set_column_filter(column_id, text)

        self._debouncer.schedule(column_id, commit)

    async def clear_filters(self) -> bool:
        self._debouncer.cancel()
        self._filter_inputs.clear()
        return await self._commit(self._state.without_filters())

    def set_column_visibility(self, column_id: str, visible: bool) -> bool:
        """Rendering-only; never triggers a fetch."""
        column = find_column(self._columns, column_id)
        if column is None or not column.hideable:
            return False
        if self._visibility.get(column_id, True) == visible:
            return False
        self._visibility[column_id] = visible
        return True

    def toggle_column(self, column_id: str) -> bool:
        return self.set_column_visibility(column_id, not self._visibility.get(column_id, True))

    async def wait_idle(self) -> None:
        """Wait for pending debounced filters and the fetches they trigger."""
        await self._debouncer.wait_idle()

    async def close(self) -> None:
        self._debouncer.cancel()

    # ── Internals ──

    async def _commit(self, new_state: TableState) -> bool:
        if new_state == self._state:
            return False
        self._state = new_state
        await self._load()
        return True

    async def _load(self) -> None:
        self._generation += 1
        generation = self._generation
        request = self._state

        source = self._source
        if isinstance(source, ClientFilteredPageSource) and source.is_loaded:
            self._apply(source.slice(request))
            return

        self._status = FetchStatus.LOADING
        self._fetch_count += 1
        outcome = await self._fetch_with_timeout(request)

        if generation != self._generation:
            self._activity.discarded(generation, self._generation)
            return
        self._apply(outcome)

    async def _fetch_with_timeout(self, request: TableState) -> PageOutcome:
        source = self._source
        try:
            if isinstance(source, ClientFilteredPageSource):
                failure = await asyncio.wait_for(source.load(self._credentials), self._timeout)
                return failure if failure is not None else source.slice(request)
            return await asyncio.wait_for(
                source.fetch_page(request, credentials=self._credentials), self._timeout
            )
        except asyncio.TimeoutError:
            self._activity.error(f"Fetch timed out after {self._timeout:g}s")
            return FetchFailure(
                error=f"The request timed out after {self._timeout:g} seconds. Please try again.",
                kind=ErrorKind.TRANSIENT,
            )

    def _apply(self, outcome: PageOutcome) -> None:
        if isinstance(outcome, PageResult):
            self._data = list(outcome.data)
            self._page_count = outcome.page_count
            self._total_items = outcome.total_items
            self._status = FetchStatus.SUCCESS
            self._error = None
            logger.debug(
                "%s: page %d/%d, %d rows of %d",
                self._name, self._state.page_index + 1, outcome.page_count,
                len(outcome.data), outcome.total_items,
            )
        else:
            # Keep the previous rows so the table does not blank out on error.
            self._status = FetchStatus.ERROR
            self._error = outcome
            self._activity.error(f"{outcome.kind.value} failure: {outcome.error}")
