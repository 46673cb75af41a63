"""Application service for browsing tables — stateless renders and stateful sessions."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from storefront_admin.application.schemas import TableEvent, TableView
from storefront_admin.application.services.table_registry import TableDefinition, TableRegistry
from storefront_admin.application.services.table_sessions import TableSession, TableSessionManager
from storefront_admin.application.table.controller import TableController
from storefront_admin.application.table.renderer import (
    DEFAULT_PAGE_SIZE_OPTIONS,
    TableProps,
    render_table,
)
from storefront_admin.domain.entities import (
    PAGE_SIZE_ALL,
    ColumnFilter,
    SessionCredentials,
    SortSpec,
    TableState,
)

logger = logging.getLogger(__name__)


def parse_filter_params(params: Iterable[str]) -> tuple[ColumnFilter, ...]:
    """Parse repeated ``column:value`` query parameters; blank values are dropped."""
    filters: dict[str, str] = {}
    for param in params:
        column_id, sep, value = param.partition(":")
        if not sep or not column_id.strip():
            raise ValueError(f"Invalid filter '{param}' — expected 'column:value'")
        if value.strip():
            filters[column_id.strip()] = value.strip()
    return tuple(ColumnFilter(column_id, value) for column_id, value in filters.items())


class TableService:
    """Drives TableControllers for registered tables and renders their views."""

    def __init__(
        self,
        registry: TableRegistry,
        sessions: TableSessionManager,
        *,
        timeout: float = 20.0,
        debounce_seconds: float = 0.3,
        page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
        default_page_size: int = 20,
    ):
        self._registry = registry
        self._sessions = sessions
        self._timeout = timeout
        self._debounce_seconds = debounce_seconds
        self._page_size_options = tuple(page_size_options)
        self._default_page_size = default_page_size

    def list_tables(self) -> list[TableDefinition]:
        return self._registry.list()

    def build_state(
        self,
        table: str,
        *,
        page_index: int = 0,
        page_size: int | None = None,
        sort: str | None = None,
        desc: bool = False,
        filters: Iterable[str] = (),
    ) -> TableState:
        """Turn query parameters into a TableState, starting from the table's defaults."""
        definition = self._registry.get(table)
        base = definition.default_state
        sorting = (SortSpec(sort, descending=desc),) if sort else base.sorting
        size = page_size if page_size is not None else self._default_page_size
        if size < 0:
            raise ValueError("page_size must be positive, or 0 to fetch every row")
        return TableState(
            page_index=max(page_index, 0),
            page_size=size,
            sorting=sorting,
            column_filters=parse_filter_params(filters),
        )

    def _controller(
        self,
        definition: TableDefinition,
        state: TableState | None,
        credentials: SessionCredentials | None,
    ) -> TableController[Any]:
        initial = state or TableState(
            page_size=self._default_page_size,
            sorting=definition.default_state.sorting,
            column_filters=definition.default_state.column_filters,
        )
        return TableController(
            definition.source_factory(),
            definition.columns,
            initial_state=initial,
            credentials=credentials,
            timeout=self._timeout,
            debounce_seconds=self._debounce_seconds,
            name=definition.name,
        )

    def render(self, definition: TableDefinition, controller: TableController[Any]) -> TableView:
        return render_table(TableProps(
            columns=controller.columns,
            data=controller.data,
            page_count=controller.page_count,
            total_items=controller.total_items,
            state=controller.state,
            is_loading=controller.is_loading,
            error=controller.error,
            visibility=controller.visibility,
            page_size_options=self._page_size_options,
            filter_inputs=controller.filter_inputs,
            title=definition.title,
        ))

    # ── Stateless ──

    async def render_stateless(
        self,
        table: str,
        state: TableState | None = None,
        *,
        hidden: Iterable[str] = (),
        credentials: SessionCredentials | None = None,
    ) -> TableView:
        """Fetch and render one page without keeping any state around."""
        definition = self._registry.get(table)
        controller = self._controller(definition, state, credentials)
        for column_id in hidden:
            controller.set_column_visibility(column_id, False)
        try:
            await controller.refresh()
            return self.render(definition, controller)
        finally:
            await controller.close()

    # ── Sessions ──

    async def create_session(
        self,
        table: str,
        state: TableState | None = None,
        *,
        credentials: SessionCredentials | None = None,
    ) -> tuple[TableSession, TableView]:
        definition = self._registry.get(table)
        controller = self._controller(definition, state, credentials)
        await controller.refresh()
        session = await self._sessions.create(definition, controller)
        return session, self.render(definition, controller)

    def get_session(self, session_id: str) -> TableSession:
        return self._sessions.get(session_id)

    def session_view(self, session_id: str) -> TableView:
        session = self._sessions.get(session_id)
        return self.render(session.definition, session.controller)

    async def close_session(self, session_id: str) -> None:
        await self._sessions.close(session_id)

    async def apply_event(self, session_id: str, event: TableEvent) -> TableView:
        """Apply one interaction to a session and return the resulting view.

        ``filter_input`` only records the typed text; the filter commits once
        typing pauses, so the returned view may still show the old rows.
        """
        session = self._sessions.get(session_id)
        controller = session.controller

        if event.type == "page_index":
            await controller.set_page_index(_int_value(event))
        elif event.type == "page_size":
            size = _int_value(event)
            if size != PAGE_SIZE_ALL and size < 1:
                raise ValueError("page_size must be positive, or 0 to fetch every row")
            await controller.set_page_size(size)
        elif event.type == "toggle_sort":
            await controller.toggle_sort(_column_id(event))
        elif event.type == "sorting":
            if event.column_id:
                await controller.set_sorting(SortSpec(event.column_id, descending=bool(event.value)))
            else:
                await controller.set_sorting(None)
        elif event.type == "filter":
            await controller.set_column_filter(_column_id(event), _str_value(event))
        elif event.type == "filter_input":
            controller.type_filter(_column_id(event), _str_value(event))
        elif event.type == "clear_filters":
            await controller.clear_filters()
        elif event.type == "toggle_column":
            controller.toggle_column(_column_id(event))
        elif event.type == "refresh":
            await controller.refresh()

        logger.debug("Session %s: applied %s", session_id, event.type)
        return self.render(session.definition, controller)


def _column_id(event: TableEvent) -> str:
    if not event.column_id:
        raise ValueError(f"Event '{event.type}' requires a column_id")
    return event.column_id


def _int_value(event: TableEvent) -> int:
    if isinstance(event.value, bool) or event.value is None:
        raise ValueError(f"Event '{event.type}' requires an integer value")
    try:
        value = int(event.value)
    except ValueError:
        raise ValueError(f"Event '{event.type}' requires an integer value") from None
    if value < 0:
        raise ValueError(f"Event '{event.type}' requires a non-negative value")
    return value


def _str_value(event: TableEvent) -> str:
    return "" if event.value is None else str(event.value)
