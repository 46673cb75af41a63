"""Column definitions — how a table reads, formats, sorts and filters one field."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from storefront_admin.domain.coercion import parse_timestamp

Accessor = str | Callable[[Any], Any]
CellFormatter = Callable[[Any, Any], str]


class ColumnKind(str, Enum):
    """Value kind — drives in-memory comparison and default cell formatting."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    LIST = "list"


def read_path(entity: Any, path: str) -> Any:
    """Resolve a dotted path (``"category.name"``) on an entity or mapping."""
    value = entity
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _default_cell(kind: ColumnKind) -> CellFormatter:
    def format_cell(value: Any, entity: Any) -> str:
        if value is None or value == "":
            return ""
        if kind is ColumnKind.LIST and isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        if kind is ColumnKind.DATE:
            parsed = parse_timestamp(value)
            return parsed.strftime("%Y-%m-%d %H:%M") if parsed else str(value)
        if kind is ColumnKind.NUMBER and isinstance(value, float) and value.is_integer():
            return f"{int(value):,}"
        if kind is ColumnKind.NUMBER and isinstance(value, (int, float)):
            return f"{value:,}"
        return str(value)

    return format_cell


@dataclass(frozen=True)
class ColumnDefinition:
    """One column of a table.

    ``accessor`` is a dotted path or a callable taking the entity. ``header``
    may be a callable receiving the column itself. ``sort_field`` and
    ``filter_field`` name the backend field a server-paginated source queries
    when this column is sorted or filtered.
    """

    id: str
    header: str | Callable[["ColumnDefinition"], str] = ""
    accessor: Accessor | None = None
    cell: CellFormatter | None = None
    sortable: bool = True
    filterable: bool = False
    hideable: bool = True
    kind: ColumnKind = ColumnKind.TEXT
    sort_field: str | None = None
    filter_field: str | None = None

    def value(self, entity: Any) -> Any:
        accessor = self.accessor if self.accessor is not None else self.id
        if callable(accessor):
            return accessor(entity)
        return read_path(entity, accessor)

    def render_header(self) -> str:
        if callable(self.header):
            return self.header(self)
        return self.header or self.id.replace("_", " ").title()

    def render_cell(self, entity: Any) -> str:
        formatter = self.cell or _default_cell(self.kind)
        return formatter(self.value(entity), entity)

    def sort_key(self, entity: Any) -> Any:
        """Comparable key for in-memory sorting; None when the value is missing."""
        value = self.value(entity)
        if value is None or value == "" or value == []:
            return None
        if self.kind is ColumnKind.DATE:
            parsed: datetime | None = parse_timestamp(value)
            return parsed
        if self.kind is ColumnKind.NUMBER:
            return value if isinstance(value, (int, float)) and not isinstance(value, bool) else None
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value).casefold()
        return str(value).casefold()


def find_column(columns: Sequence[ColumnDefinition], column_id: str) -> ColumnDefinition | None:
    for column in columns:
        if column.id == column_id:
            return column
    return None
