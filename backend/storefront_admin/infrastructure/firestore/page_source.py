"""Server-paginated Firestore page source — count, cursor walk, then one page.

Firestore has no offsets, so a page after the first is reached by reading
``page_index * page_size`` documents in the same order and starting after
the last of them. Ties on the sort field are broken by document id so every
document lands on exactly one page.
"""

import logging
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from typing import Any, Generic

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import BaseQuery, FieldFilter
from google.cloud.firestore_v1.field_path import FieldPath

from storefront_admin.application.interfaces import PageSource
from storefront_admin.application.table.columns import ColumnDefinition
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
from storefront_admin.domain.exceptions import ConfigurationError
from storefront_admin.infrastructure.logging.colored_logger import (
    TableActivity,
    TableActivityLogger,
)

from .errors import failure_from_google_error
from .transformers import snapshot_parts

logger = logging.getLogger(__name__)

# Upper bound for a prefix range on a string field.
_PREFIX_END = "\uf8ff"


@dataclass(frozen=True)
class _Filter:
    field: str
    value: str
    prefix: bool


@dataclass(frozen=True)
class _Order:
    field: str
    descending: bool


def _describe(order: _Order) -> str:
    return f"{order.field}{' desc' if order.descending else ''}"


class FirestorePageSource(PageSource[E], Generic[E]):
    """PageSource over one Firestore collection.

    Sorting is limited to columns that declare a ``sort_field``; anything
    else falls back to ``default_sort``. Filters apply to columns with a
    ``filter_field``: columns listed in ``exact_filter_columns`` match by
    equality, the rest by prefix on a lower-cased field.
    """

    mode = QueryMode.SERVER

    def __init__(
        self,
        db_provider: Callable[[], Any],
        collection: str,
        transform: Callable[[str, dict[str, Any]], E],
        columns: Sequence[ColumnDefinition],
        *,
        default_sort: tuple[str, bool] = ("createdAt", True),
        exact_filter_columns: Collection[str] = (),
    ):
        self._db_provider = db_provider
        self._collection = collection
        self._transform = transform
        self._default_sort = _Order(*default_sort)
        self._sort_fields = {c.id: c.sort_field for c in columns if c.sortable and c.sort_field}
        self._filter_fields = {c.id: c.filter_field for c in columns if c.filterable and c.filter_field}
        self._exact = frozenset(exact_filter_columns)
        self._activity = TableActivityLogger(f"firestore:{collection}")

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def sortable_columns(self) -> frozenset[str]:
        return frozenset(self._sort_fields)

    # ── Query building ──

    def _filters(self, request: PageRequest) -> list[_Filter]:
        filters = []
        for column_filter in request.column_filters:
            field = self._filter_fields.get(column_filter.column_id)
            if field is None:
                logger.debug("Column '%s' is not filterable on %s", column_filter.column_id, self._collection)
                continue
            prefix = column_filter.column_id not in self._exact
            value = column_filter.value.lower() if prefix else column_filter.value
            filters.append(_Filter(field, value, prefix))

        prefix_filters = [f for f in filters if f.prefix]
        if len(prefix_filters) > 1:
            logger.warning(
                "Only one prefix filter per query on %s — ignoring %s",
                self._collection, [f.field for f in prefix_filters[1:]],
            )
            filters = [f for f in filters if not f.prefix or f is prefix_filters[0]]
        return filters

    def _order(self, request: PageRequest, filters: list[_Filter]) -> _Order:
        sort = request.primary_sort
        order = self._default_sort
        if sort is not None:
            field = self._sort_fields.get(sort.column_id)
            if field is None:
                logger.info(
                    "Column '%s' is not sortable on %s, ordering by %s instead",
                    sort.column_id, self._collection, _describe(order),
                )
            else:
                order = _Order(field, sort.descending)

        # A range filter requires the first order_by on the same field.
        prefix = next((f for f in filters if f.prefix), None)
        if prefix is not None and prefix.field != order.field:
            applied = _Order(prefix.field, False)
            log = logger.info if sort is not None else logger.debug
            log(
                "Prefix filter on %s overrides order %s with %s on %s",
                prefix.field, _describe(order), _describe(applied), self._collection,
            )
            return applied
        return order

    def _base_query(self, filters: list[_Filter]) -> Any:
        query = self._db_provider().collection(self._collection)
        for f in filters:
            if f.prefix:
                query = query.where(filter=FieldFilter(f.field, ">=", f.value))
                query = query.where(filter=FieldFilter(f.field, "<=", f.value + _PREFIX_END))
            else:
                query = query.where(filter=FieldFilter(f.field, "==", f.value))
        return query

    @staticmethod
    def _ordered(query: Any, order: _Order) -> Any:
        direction = BaseQuery.DESCENDING if order.descending else BaseQuery.ASCENDING
        return query.order_by(order.field, direction=direction).order_by(FieldPath.document_id())

    # ── PageSource ──

    async def fetch_page(
        self,
        request: PageRequest,
        *,
        credentials: SessionCredentials | None = None,
    ) -> PageOutcome:
        try:
            return await self._fetch(request)
        except ConfigurationError as exc:
            self._activity.error("Firestore is not configured", exc)
            return FetchFailure(error=exc.message, kind=ErrorKind.CONFIGURATION)
        except GoogleAPIError as exc:
            self._activity.error("Page fetch failed", exc)
            return failure_from_google_error(exc, self._collection)

    async def _fetch(self, request: PageRequest) -> PageResult[E]:
        filters = self._filters(request)
        base = self._base_query(filters)

        with self._activity.timed_step(TableActivity.COUNT, "Counting documents", filters=len(filters)):
            aggregate = await base.count(alias="total").get()
        total = int(aggregate[0][0].value) if aggregate and aggregate[0] else 0
        if total == 0:
            return PageResult(data=[], page_count=0, total_items=0)

        page_count = compute_page_count(total, request.page_size)
        order = self._order(request, filters)
        query = self._ordered(base, order)

        if request.fetches_all:
            with self._activity.timed_step(TableActivity.FETCH, "Fetching all documents", total=total):
                snapshots = await query.get()
            return PageResult(data=self._rows(snapshots), page_count=page_count, total_items=total)

        if request.page_index > 0:
            skip = request.page_index * request.page_size
            with self._activity.timed_step(TableActivity.CURSOR, "Walking to page", page=request.page_index, skip=skip):
                preceding = await query.limit(skip).get()
            if len(preceding) < skip:
                return PageResult(data=[], page_count=page_count, total_items=total)
            query = query.start_after(preceding[-1])

        with self._activity.timed_step(
            TableActivity.FETCH, "Fetching page",
            page=request.page_index, size=request.page_size, order=_describe(order),
        ):
            snapshots = await query.limit(request.page_size).get()
        return PageResult(data=self._rows(snapshots), page_count=page_count, total_items=total)

    def _rows(self, snapshots: Sequence[Any]) -> list[E]:
        return [self._transform(*snapshot_parts(snapshot)) for snapshot in snapshots]
