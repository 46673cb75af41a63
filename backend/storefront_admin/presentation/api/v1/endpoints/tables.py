"""Table browsing endpoints — stateless page renders and stateful sessions.

Fetch failures are part of the rendered view (``body_state == "error"``),
so these endpoints answer 200 even when the backend is down.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront_admin.application.schemas import (
    TableEvent,
    TableSessionResponse,
    TableSummary,
    TableView,
)
from storefront_admin.application.services import TableService
from storefront_admin.domain.entities import SessionCredentials
from storefront_admin.domain.exceptions import TableNotFoundError, TableSessionNotFoundError
from storefront_admin.infrastructure.dependencies import get_session_credentials, get_table_service

router = APIRouter(prefix="/tables", tags=["Tables"])


@router.get("", response_model=list[TableSummary])
async def list_tables(
    service: TableService = Depends(get_table_service),
) -> list[TableSummary]:
    """List the registered tables and their columns."""
    return [
        TableSummary(
            name=d.name,
            title=d.title,
            backend=d.backend,
            mode=d.mode.value,
            columns=d.column_ids,
        )
        for d in service.list_tables()
    ]


@router.get("/sessions/{session_id}", response_model=TableView)
async def get_session_view(
    session_id: str,
    service: TableService = Depends(get_table_service),
) -> TableView:
    """Current view of a table session, including results of debounced filters."""
    try:
        return service.session_view(session_id)
    except TableSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/sessions/{session_id}/events", response_model=TableView)
async def post_session_event(
    session_id: str,
    event: TableEvent,
    service: TableService = Depends(get_table_service),
) -> TableView:
    """Apply one interaction (page change, sort toggle, filter, …) to a session."""
    try:
        return await service.apply_event(session_id, event)
    except TableSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    service: TableService = Depends(get_table_service),
) -> None:
    try:
        await service.close_session(session_id)
    except TableSessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{table}", response_model=TableView)
async def get_table_page(
    table: str,
    page_index: int = Query(0, ge=0),
    page_size: int | None = Query(None, ge=0, description="0 fetches every row"),
    sort: str | None = Query(None, description="Column id to sort by"),
    desc: bool = False,
    filter: list[str] = Query([], description="Repeated column:value filters"),
    hidden: list[str] = Query([], description="Repeated column ids to hide"),
    service: TableService = Depends(get_table_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> TableView:
    """Fetch and render one page of a table without creating a session."""
    try:
        state = service.build_state(
            table, page_index=page_index, page_size=page_size, sort=sort, desc=desc, filters=filter,
        )
        return await service.render_stateless(table, state, hidden=hidden, credentials=credentials)
    except TableNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post("/{table}/sessions", response_model=TableSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    table: str,
    page_size: int | None = Query(None, ge=0),
    sort: str | None = None,
    desc: bool = False,
    filter: list[str] = Query([]),
    service: TableService = Depends(get_table_service),
    credentials: SessionCredentials = Depends(get_session_credentials),
) -> TableSessionResponse:
    """Open a stateful table session and return its first page."""
    try:
        state = service.build_state(table, page_size=page_size, sort=sort, desc=desc, filters=filter)
        session, view = await service.create_session(table, state, credentials=credentials)
    except TableNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return TableSessionResponse(session_id=session.id, table=table, view=view)
