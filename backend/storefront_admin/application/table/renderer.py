"""Table renderer — turns controller state into a ``TableView``.

Pure: the same props always render the same view. The view carries the
callbacks' payloads (``next_sorting`` on headers, page indices in the
footer) rather than the callbacks themselves; clients send them back as
table events.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from storefront_admin.application.schemas.table import (
    Cell,
    ColumnToggle,
    ErrorInfo,
    HeaderCell,
    PaginationFooter,
    Row,
    SortingParam,
    TableView,
)
from storefront_admin.application.table.columns import ColumnDefinition
from storefront_admin.domain.entities import FetchFailure, TableState

DEFAULT_PAGE_SIZE_OPTIONS = (20, 50, 100)


@dataclass
class TableProps:
    columns: Sequence[ColumnDefinition]
    data: Sequence[Any]
    page_count: int
    total_items: int
    state: TableState
    is_loading: bool = False
    error: FetchFailure | None = None
    visibility: dict[str, bool] = field(default_factory=dict)
    page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS
    filter_inputs: dict[str, str] = field(default_factory=dict)
    title: str = ""


def _is_visible(props: TableProps, column: ColumnDefinition) -> bool:
    return props.visibility.get(column.id, True) or not column.hideable


def _header(props: TableProps, column: ColumnDefinition) -> HeaderCell:
    sort = props.state.primary_sort
    direction = None
    if sort is not None and sort.column_id == column.id:
        direction = "desc" if sort.descending else "asc"

    next_sorting = None
    if column.sortable:
        # unsorted → asc → desc → asc
        next_sorting = SortingParam(column_id=column.id, desc=direction == "asc")

    filter_value = props.filter_inputs.get(column.id)
    if filter_value is None:
        filter_value = props.state.filter_value(column.id) or ""

    return HeaderCell(
        column_id=column.id,
        label=column.render_header(),
        sortable=column.sortable,
        sort_direction=direction if column.sortable else None,
        next_sorting=next_sorting,
        filterable=column.filterable,
        filter_value=filter_value,
    )


def _row(index: int, entity: Any, columns: Sequence[ColumnDefinition]) -> Row:
    row_id = getattr(entity, "id", None) or str(index)
    return Row(
        id=str(row_id),
        cells=[Cell(column_id=c.id, text=c.render_cell(entity)) for c in columns],
    )


def _pagination(props: TableProps, shown_rows: int) -> PaginationFooter:
    state = props.state
    page_count = props.page_count
    last_page_index = max(page_count - 1, 0)

    if shown_rows and not state.fetches_all:
        first_row = state.page_index * state.page_size + 1
    elif shown_rows:
        first_row = 1
    else:
        first_row = 0
    last_row = first_row + shown_rows - 1 if shown_rows else 0

    options = sorted(set(props.page_size_options))
    if not state.fetches_all and state.page_size not in options:
        options = sorted(options + [state.page_size])

    at_start = state.page_index <= 0
    at_end = state.page_index >= page_count - 1
    return PaginationFooter(
        page_index=state.page_index,
        page_count=page_count,
        page_size=state.page_size,
        page_size_options=options,
        total_items=props.total_items,
        first_row=first_row,
        last_row=last_row,
        page_label=f"Page {state.page_index + 1} of {max(page_count, 1)}",
        range_label=(
            f"Showing {first_row}–{last_row} of {props.total_items}" if shown_rows
            else f"Showing 0 of {props.total_items}"
        ),
        first_disabled=at_start,
        previous_disabled=at_start,
        next_disabled=at_end,
        last_disabled=at_end,
        last_page_index=last_page_index,
    )


def render_table(props: TableProps) -> TableView:
    """Render one table state.

    Body states are mutually exclusive: ``loading`` carries no rows, ``error``
    carries the message plus whatever rows were shown before, ``empty`` is a
    successful fetch with zero rows.
    """
    visible = [c for c in props.columns if _is_visible(props, c)]

    if props.is_loading:
        body_state, entities = "loading", []
    elif props.error is not None:
        body_state, entities = "error", list(props.data)
    elif not props.data:
        body_state, entities = "empty", []
    else:
        body_state, entities = "rows", list(props.data)

    error = None
    if props.error is not None and not props.is_loading:
        error = ErrorInfo(
            message=props.error.error,
            kind=props.error.kind.value,
            retryable=props.error.retryable,
        )

    return TableView(
        title=props.title,
        headers=[_header(props, c) for c in visible],
        body_state=body_state,
        rows=[_row(i, entity, visible) for i, entity in enumerate(entities)],
        error=error,
        pagination=_pagination(props, len(entities)),
        visibility_menu=[
            ColumnToggle(column_id=c.id, label=c.render_header(), visible=_is_visible(props, c))
            for c in props.columns if c.hideable
        ],
    )
