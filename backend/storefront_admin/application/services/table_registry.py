"""Registry of named table definitions — columns, page source and defaults per table."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from storefront_admin.application.interfaces import PageSource
from storefront_admin.application.table.columns import ColumnDefinition
from storefront_admin.domain.entities import QueryMode, TableState
from storefront_admin.domain.exceptions import TableNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableDefinition:
    """Everything needed to instantiate one table.

    ``source_factory`` builds a fresh page source per controller, so a
    client-filtered source's cache is never shared between sessions.
    """

    name: str
    title: str
    backend: str
    mode: QueryMode
    columns: tuple[ColumnDefinition, ...]
    source_factory: Callable[[], PageSource[Any]]
    default_state: TableState = field(default_factory=TableState)

    @property
    def column_ids(self) -> list[str]:
        return [c.id for c in self.columns]


class TableRegistry:
    def __init__(self, definitions: Sequence[TableDefinition] = ()):
        self._definitions: dict[str, TableDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: TableDefinition) -> None:
        if definition.name in self._definitions:
            logger.warning("Table '%s' registered twice — replacing the earlier definition", definition.name)
        self._definitions[definition.name] = definition

    def get(self, name: str) -> TableDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise TableNotFoundError(name)
        return definition

    def list(self) -> list[TableDefinition]:
        return sorted(self._definitions.values(), key=lambda d: d.name)

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
