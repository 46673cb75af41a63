"""Pydantic view models for a rendered table and the table HTTP API."""

from typing import Literal

from pydantic import BaseModel, Field

BodyState = Literal["loading", "error", "empty", "rows"]
SortDirection = Literal["asc", "desc"]


class SortingParam(BaseModel):
    """A single-column sort spec as emitted by a header click."""

    column_id: str
    desc: bool = False


class HeaderCell(BaseModel):
    column_id: str
    label: str
    sortable: bool
    sort_direction: SortDirection | None = None
    next_sorting: SortingParam | None = None
    filterable: bool = False
    filter_value: str = ""


class Cell(BaseModel):
    column_id: str
    text: str


class Row(BaseModel):
    id: str
    cells: list[Cell]


class ErrorInfo(BaseModel):
    message: str
    kind: str
    retryable: bool


class PaginationFooter(BaseModel):
    page_index: int
    page_count: int
    page_size: int
    page_size_options: list[int]
    total_items: int
    first_row: int = Field(..., description="1-based index of the first row shown, 0 when none")
    last_row: int
    page_label: str = Field(..., examples=["Page 1 of 3"])
    range_label: str = Field(..., examples=["Showing 1–20 of 45"])
    first_disabled: bool
    previous_disabled: bool
    next_disabled: bool
    last_disabled: bool
    last_page_index: int


class ColumnToggle(BaseModel):
    column_id: str
    label: str
    visible: bool


class TableView(BaseModel):
    """Everything a client needs to draw one table state."""

    title: str = ""
    headers: list[HeaderCell]
    body_state: BodyState
    rows: list[Row]
    empty_message: str = "No results."
    error: ErrorInfo | None = None
    pagination: PaginationFooter
    visibility_menu: list[ColumnToggle]


# ── Table API ──


class TableSummary(BaseModel):
    name: str
    title: str
    backend: str
    mode: str
    columns: list[str]


TableEventType = Literal[
    "page_index",
    "page_size",
    "toggle_sort",
    "sorting",
    "filter",
    "filter_input",
    "clear_filters",
    "toggle_column",
    "refresh",
]


class TableEvent(BaseModel):
    """One user interaction with a stateful table session."""

    type: TableEventType
    column_id: str | None = None
    value: str | int | bool | None = None


class TableSessionResponse(BaseModel):
    session_id: str
    table: str
    view: TableView
