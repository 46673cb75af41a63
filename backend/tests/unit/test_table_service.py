"""Unit tests for TableService — stateless renders, sessions and table events."""

from dataclasses import dataclass

import pytest

from storefront_admin.application.schemas import TableEvent
from storefront_admin.application.services import (
    TableDefinition,
    TableRegistry,
    TableService,
    TableSessionManager,
    parse_filter_params,
)
from storefront_admin.application.table.client_query import ClientFilteredPageSource
from storefront_admin.application.table.columns import ColumnDefinition, ColumnKind
from storefront_admin.domain.entities import (
    ColumnFilter,
    QueryMode,
    SortSpec,
    TableState,
)
from storefront_admin.domain.exceptions import (
    BackendRequestError,
    TableNotFoundError,
    TableSessionNotFoundError,
)


@dataclass(frozen=True)
class _Row:
    id: str
    title: str
    price: int


ROWS = [_Row(f"r{i}", f"Item {i:02d}", i * 10) for i in range(25)]

COLUMNS = (
    ColumnDefinition(id="title", filterable=True, hideable=False),
    ColumnDefinition(id="price", kind=ColumnKind.NUMBER),
)


# ── Helpers ──


class FakeLoader:
    def __init__(self, rows=ROWS):
        self.rows = rows
        self.calls = 0
        self.error: Exception | None = None

    async def __call__(self, credentials=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.rows)


def _definition(loader: FakeLoader, name: str = "items") -> TableDefinition:
    return TableDefinition(
        name=name,
        title="Items",
        backend="memory",
        mode=QueryMode.CLIENT,
        columns=COLUMNS,
        source_factory=lambda: ClientFilteredPageSource(loader, COLUMNS, source_name=name),
        default_state=TableState(sorting=(SortSpec("price", descending=True),)),
    )


def _service(loader: FakeLoader | None = None, sessions: TableSessionManager | None = None) -> TableService:
    registry = TableRegistry([_definition(loader or FakeLoader())])
    return TableService(
        registry,
        sessions or TableSessionManager(),
        timeout=1.0,
        debounce_seconds=0.01,
        default_page_size=20,
    )


def _titles(view) -> list[str]:
    return [row.cells[0].text for row in view.rows]


# ── parse_filter_params ──


def test_parse_filter_params():
    assert parse_filter_params(["title:item", "price: ", "title:web app"]) == (
        ColumnFilter("title", "web app"),
    )


def test_parse_filter_params_rejects_missing_colon():
    with pytest.raises(ValueError):
        parse_filter_params(["title"])


# ── build_state ──


def test_build_state_uses_table_default_sort():
    state = _service().build_state("items")
    assert state.page_size == 20
    assert state.primary_sort == SortSpec("price", descending=True)


def test_build_state_explicit_params():
    state = _service().build_state("items", page_index=2, page_size=0, sort="title", filters=["title:a"])
    assert state.fetches_all
    assert state.page_index == 2
    assert state.primary_sort == SortSpec("title")
    assert state.filter_value("title") == "a"


def test_build_state_unknown_table():
    with pytest.raises(TableNotFoundError):
        _service().build_state("nope")


def test_build_state_rejects_negative_page_size():
    with pytest.raises(ValueError):
        _service().build_state("items", page_size=-1)


# ── Stateless ──


@pytest.mark.asyncio
async def test_render_stateless_default_state():
    view = await _service().render_stateless("items")

    assert view.title == "Items"
    assert view.body_state == "rows"
    assert _titles(view)[0] == "Item 24"
    assert view.pagination.page_label == "Page 1 of 2"
    assert view.pagination.range_label == "Showing 1–20 of 25"


@pytest.mark.asyncio
async def test_render_stateless_hides_columns():
    service = _service()
    state = service.build_state("items", page_index=1)

    view = await service.render_stateless("items", state, hidden=["price"])

    assert [h.column_id for h in view.headers] == ["title"]
    assert len(view.rows) == 5
    assert [t.visible for t in view.visibility_menu] == [False]


@pytest.mark.asyncio
async def test_render_stateless_reports_backend_failure_in_view():
    loader = FakeLoader()
    loader.error = BackendRequestError("erpnext", "ERPNext did not respond in time.", retryable=True)

    view = await _service(loader).render_stateless("items")

    assert view.body_state == "error"
    assert view.error.kind == "transient"
    assert view.error.retryable is True
    assert view.rows == []


# ── Sessions ──


@pytest.mark.asyncio
async def test_session_loads_once_then_pages_in_memory():
    loader = FakeLoader()
    service = _service(loader)

    session, view = await service.create_session("items")
    assert len(view.rows) == 20

    view = await service.apply_event(session.id, TableEvent(type="page_index", value=1))
    assert len(view.rows) == 5
    view = await service.apply_event(session.id, TableEvent(type="toggle_sort", column_id="title"))
    assert _titles(view)[:2] == ["Item 20", "Item 21"]
    assert view.pagination.page_index == 1
    assert loader.calls == 1


@pytest.mark.asyncio
async def test_sort_toggle_cycle_via_events():
    service = _service()
    session, _ = await service.create_session("items", service.build_state("items", sort="title"))

    view = await service.apply_event(session.id, TableEvent(type="toggle_sort", column_id="title"))
    assert view.headers[0].sort_direction == "desc"
    assert view.headers[0].next_sorting.desc is False

    view = await service.apply_event(session.id, TableEvent(type="sorting", column_id="title", value=False))
    assert view.headers[0].sort_direction == "asc"


@pytest.mark.asyncio
async def test_page_size_event_resets_index():
    service = _service()
    session, _ = await service.create_session("items")
    await service.apply_event(session.id, TableEvent(type="page_index", value=1))

    view = await service.apply_event(session.id, TableEvent(type="page_size", value=0))

    assert view.pagination.page_index == 0
    assert len(view.rows) == 25
    assert view.pagination.next_disabled is True


@pytest.mark.asyncio
async def test_filter_input_commits_after_pause():
    service = _service()
    session, _ = await service.create_session("items")

    view = await service.apply_event(
        session.id, TableEvent(type="filter_input", column_id="title", value="item 0")
    )
    assert view.headers[0].filter_value == "item 0"

    await service.get_session(session.id).controller.wait_idle()
    view = service.session_view(session.id)
    assert view.pagination.total_items == 10

    view = await service.apply_event(session.id, TableEvent(type="clear_filters"))
    assert view.pagination.total_items == 25
    assert view.headers[0].filter_value == ""


@pytest.mark.asyncio
async def test_toggle_column_event():
    service = _service()
    session, _ = await service.create_session("items")

    view = await service.apply_event(session.id, TableEvent(type="toggle_column", column_id="price"))

    assert [h.column_id for h in view.headers] == ["title"]


@pytest.mark.asyncio
async def test_refresh_event_reloads():
    loader = FakeLoader()
    service = _service(loader)
    session, _ = await service.create_session("items")

    await service.apply_event(session.id, TableEvent(type="refresh"))

    assert loader.calls == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("event", [
    TableEvent(type="page_index", value="two"),
    TableEvent(type="page_index", value=-1),
    TableEvent(type="page_size", value=True),
    TableEvent(type="toggle_sort"),
    TableEvent(type="filter", value="x"),
])
async def test_invalid_events_raise_value_error(event):
    service = _service()
    session, _ = await service.create_session("items")
    with pytest.raises(ValueError):
        await service.apply_event(session.id, event)


@pytest.mark.asyncio
async def test_close_session():
    service = _service()
    session, _ = await service.create_session("items")

    await service.close_session(session.id)

    with pytest.raises(TableSessionNotFoundError):
        service.session_view(session.id)
    with pytest.raises(TableSessionNotFoundError):
        await service.close_session(session.id)


@pytest.mark.asyncio
async def test_oldest_session_is_evicted():
    sessions = TableSessionManager(max_sessions=2)
    service = _service(sessions=sessions)

    first, _ = await service.create_session("items")
    await service.create_session("items")
    await service.create_session("items")

    assert sessions.session_count == 2
    with pytest.raises(TableSessionNotFoundError):
        service.get_session(first.id)
