"""Domain entities for the tabular data browser — state, requests and outcomes."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

E = TypeVar("E")

# Page size sentinel meaning "fetch every row in one page".
PAGE_SIZE_ALL = 0


class QueryMode(str, Enum):
    """How a page source honours pagination, sorting and filtering."""

    SERVER = "server"   # every state change is a backend query
    CLIENT = "client"   # fetch once, then filter/sort/slice in memory


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"  # missing URL or credentials, not retryable
    TRANSIENT = "transient"          # network, timeout, 5xx; user may retry
    BACKEND = "backend"              # backend refused the request (4xx, missing index)


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SortSpec:
    column_id: str
    descending: bool = False


@dataclass(frozen=True)
class ColumnFilter:
    column_id: str
    value: str


@dataclass(frozen=True)
class TableState:
    """Pagination, sort and filter state of one table.

    Immutable: every transition returns a new instance, so two states can be
    compared to decide whether a change actually happened. The same shape is
    the parameter object handed to ``PageSource.fetch_page``.
    """

    page_index: int = 0
    page_size: int = 20
    sorting: tuple[SortSpec, ...] = ()
    column_filters: tuple[ColumnFilter, ...] = ()

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError("page_index must be >= 0")
        if self.page_size < 0:
            raise ValueError("page_size must be > 0 or PAGE_SIZE_ALL")

    @property
    def fetches_all(self) -> bool:
        return self.page_size == PAGE_SIZE_ALL

    @property
    def primary_sort(self) -> SortSpec | None:
        return self.sorting[0] if self.sorting else None

    def filter_value(self, column_id: str) -> str | None:
        for column_filter in self.column_filters:
            if column_filter.column_id == column_id:
                return column_filter.value
        return None

    def with_page_index(self, page_index: int) -> "TableState":
        return replace(self, page_index=max(page_index, 0))

    def with_page_size(self, page_size: int) -> "TableState":
        if page_size == self.page_size:
            return self
        return replace(self, page_size=page_size, page_index=0)

    def with_sorting(self, sorting: SortSpec | None) -> "TableState":
        """Replace the sort spec — single-column sort only."""
        return replace(self, sorting=(sorting,) if sorting else ())

    def with_column_filter(self, column_id: str, value: str) -> "TableState":
        """Upsert a filter by column id; an empty value removes it.

        Changing the filter set returns to the first page, since the old page
        index refers to a different result set.
        """
        value = value.strip()
        if self.filter_value(column_id) == (value or None):
            return self
        if not value:
            filters = tuple(f for f in self.column_filters if f.column_id != column_id)
        elif self.filter_value(column_id) is None:
            filters = self.column_filters + (ColumnFilter(column_id, value),)
        else:
            # Replace in place; order of the other filters is kept.
            filters = tuple(
                ColumnFilter(column_id, value) if f.column_id == column_id else f
                for f in self.column_filters
            )
        if filters == self.column_filters:
            return self
        return replace(self, column_filters=filters, page_index=0)

    def without_filters(self) -> "TableState":
        if not self.column_filters:
            return self
        return replace(self, column_filters=(), page_index=0)


# The fetch parameters are exactly the table state.
PageRequest = TableState


@dataclass(frozen=True)
class SessionCredentials:
    """Caller identity passed explicitly into every backend call.

    ``sid`` is an ERPNext session cookie; Firestore sources authenticate with
    the service account and ignore it.
    """

    sid: str | None = None


@dataclass
class PageResult(Generic[E]):
    data: list[E] = field(default_factory=list)
    page_count: int = 0
    total_items: int = 0

    @property
    def success(self) -> bool:
        return True


@dataclass
class FetchFailure:
    """A failed fetch — distinct from a successful fetch with zero rows."""

    error: str
    kind: ErrorKind = ErrorKind.TRANSIENT

    @property
    def success(self) -> bool:
        return False

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.TRANSIENT


PageOutcome = PageResult[Any] | FetchFailure


def compute_page_count(total_items: int, page_size: int) -> int:
    """Number of pages for a result set; ``PAGE_SIZE_ALL`` yields one page."""
    if total_items <= 0:
        return 0
    if page_size == PAGE_SIZE_ALL:
        return 1
    return math.ceil(total_items / page_size)
