"""Table session manager — in-process store of live table controllers."""

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from storefront_admin.application.services.table_registry import TableDefinition
from storefront_admin.application.table.controller import TableController
from storefront_admin.domain.exceptions import TableSessionNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class TableSession:
    id: str
    definition: TableDefinition
    controller: TableController[Any]


class TableSessionManager:
    """Keeps stateful table sessions keyed by a random id.

    Sessions live only in memory: they vanish on restart and are never
    shared between processes. The oldest session is closed once
    ``max_sessions`` is exceeded.
    """

    def __init__(self, max_sessions: int = 256) -> None:
        self._sessions: dict[str, TableSession] = {}
        self._max_sessions = max_sessions

    async def create(self, definition: TableDefinition, controller: TableController[Any]) -> TableSession:
        session = TableSession(id=uuid.uuid4().hex, definition=definition, controller=controller)
        self._sessions[session.id] = session
        logger.debug("Opened table session %s (%s)", session.id, definition.name)

        while len(self._sessions) > self._max_sessions:
            oldest = next(iter(self._sessions))
            logger.warning("Too many table sessions — closing the oldest (%s)", oldest)
            await self.close(oldest)
        return session

    def get(self, session_id: str) -> TableSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise TableSessionNotFoundError(session_id)
        return session

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise TableSessionNotFoundError(session_id)
        await session.controller.close()
        logger.debug("Closed table session %s", session_id)

    async def shutdown(self) -> None:
        """Close every open session."""
        for session in list(self._sessions.values()):
            await session.controller.close()
        self._sessions.clear()

    @property
    def session_count(self) -> int:
        return len(self._sessions)
