"""Unit tests for render_table — body states, headers and the pagination footer."""

from dataclasses import dataclass

from storefront_admin.application.table.columns import ColumnDefinition, ColumnKind
from storefront_admin.application.table.renderer import TableProps, render_table
from storefront_admin.domain.entities import (
    PAGE_SIZE_ALL,
    ColumnFilter,
    ErrorKind,
    FetchFailure,
    SortSpec,
    TableState,
)


@dataclass(frozen=True)
class _Row:
    id: str
    title: str
    price: float
    tags: tuple[str, ...] = ()


COLUMNS = (
    ColumnDefinition(id="title", header="Title", hideable=False, filterable=True),
    ColumnDefinition(id="price", header=lambda column: column.id.upper(), kind=ColumnKind.NUMBER),
    ColumnDefinition(id="tags", kind=ColumnKind.LIST, sortable=False),
)

ROWS = [_Row("a", "Alpha", 1500.0, ("web", "shop")), _Row("b", "Beta", 20.5)]


def _props(**overrides) -> TableProps:
    values = dict(
        columns=COLUMNS,
        data=ROWS,
        page_count=3,
        total_items=45,
        state=TableState(page_index=0, page_size=20),
    )
    values.update(overrides)
    return TableProps(**values)


# ── Body states ──


def test_rows_state_formats_cells():
    view = render_table(_props())

    assert view.body_state == "rows"
    assert [row.id for row in view.rows] == ["a", "b"]
    cells = {c.column_id: c.text for c in view.rows[0].cells}
    assert cells == {"title": "Alpha", "price": "1,500", "tags": "web, shop"}
    assert view.rows[1].cells[1].text == "20.5"


def test_loading_state_has_no_rows():
    view = render_table(_props(is_loading=True))
    assert view.body_state == "loading"
    assert view.rows == []
    assert view.error is None


def test_empty_state_after_successful_fetch():
    view = render_table(_props(data=[], page_count=0, total_items=0))
    assert view.body_state == "empty"
    assert view.empty_message == "No results."
    assert view.pagination.page_label == "Page 1 of 1"
    assert view.pagination.range_label == "Showing 0 of 0"


def test_error_state_keeps_previous_rows_and_message():
    failure = FetchFailure(error="ERPNext did not respond in time.", kind=ErrorKind.TRANSIENT)
    view = render_table(_props(error=failure))

    assert view.body_state == "error"
    assert len(view.rows) == 2
    assert view.error.message == "ERPNext did not respond in time."
    assert view.error.kind == "transient"
    assert view.error.retryable is True


def test_error_without_rows_is_distinct_from_empty():
    failure = FetchFailure(error="ERPNext API URL is not configured.", kind=ErrorKind.CONFIGURATION)
    view = render_table(_props(data=[], error=failure))
    assert view.body_state == "error"
    assert view.error.retryable is False


# ── Headers ──


def test_header_next_sorting_cycle():
    unsorted = render_table(_props()).headers[0]
    assert unsorted.sort_direction is None
    assert unsorted.next_sorting.desc is False

    asc = render_table(_props(state=TableState(sorting=(SortSpec("title"),)))).headers[0]
    assert asc.sort_direction == "asc"
    assert asc.next_sorting.desc is True

    desc = render_table(_props(state=TableState(sorting=(SortSpec("title", True),)))).headers[0]
    assert desc.sort_direction == "desc"
    assert desc.next_sorting.desc is False


def test_non_sortable_header_has_no_next_sorting():
    tags = render_table(_props()).headers[2]
    assert tags.sortable is False
    assert tags.next_sorting is None
    assert tags.label == "Tags"


def test_callable_header_and_filter_values():
    state = TableState(column_filters=(ColumnFilter("title", "alp"),))
    headers = render_table(_props(state=state)).headers
    assert headers[1].label == "PRICE"
    assert headers[0].filter_value == "alp"

    typed = render_table(_props(state=state, filter_inputs={"title": "alph"})).headers
    assert typed[0].filter_value == "alph"


# ── Visibility ──


def test_hidden_columns_are_left_out():
    view = render_table(_props(visibility={"price": False, "title": False}))

    assert [h.column_id for h in view.headers] == ["title", "tags"]
    assert [c.column_id for c in view.rows[0].cells] == ["title", "tags"]
    menu = {t.column_id: t.visible for t in view.visibility_menu}
    assert menu == {"price": False, "tags": True}


# ── Pagination ──


def test_first_page_disables_back_controls():
    footer = render_table(_props()).pagination
    assert footer.first_disabled and footer.previous_disabled
    assert not footer.next_disabled and not footer.last_disabled
    assert footer.page_label == "Page 1 of 3"
    assert footer.range_label == "Showing 1–2 of 45"
    assert footer.last_page_index == 2


def test_last_page_disables_forward_controls():
    footer = render_table(_props(state=TableState(page_index=2, page_size=20))).pagination
    assert not footer.first_disabled and not footer.previous_disabled
    assert footer.next_disabled and footer.last_disabled
    assert footer.first_row == 41
    assert footer.last_row == 42


def test_single_page_disables_everything():
    footer = render_table(_props(page_count=1, total_items=2)).pagination
    assert all([footer.first_disabled, footer.previous_disabled, footer.next_disabled, footer.last_disabled])


def test_page_size_options_include_current_size():
    footer = render_table(_props(state=TableState(page_size=25))).pagination
    assert footer.page_size_options == [20, 25, 50, 100]

    all_rows = render_table(_props(state=TableState(page_size=PAGE_SIZE_ALL), page_count=1)).pagination
    assert all_rows.page_size_options == [20, 50, 100]
    assert all_rows.first_row == 1
