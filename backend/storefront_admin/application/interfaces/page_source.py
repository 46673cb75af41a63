"""Backend query adapter port — one contract for every tabular backend."""

from abc import ABC, abstractmethod
from typing import Generic

from storefront_admin.domain.entities import (
    E,
    PageOutcome,
    PageRequest,
    QueryMode,
    SessionCredentials,
)


class PageSource(ABC, Generic[E]):
    """Port for fetching one page of canonical entities.

    Implementations never raise for backend failures: they return a
    ``FetchFailure`` so a failed fetch cannot be mistaken for an empty page.
    """

    mode: QueryMode = QueryMode.SERVER

    @abstractmethod
    async def fetch_page(
        self,
        request: PageRequest,
        *,
        credentials: SessionCredentials | None = None,
    ) -> PageOutcome:
        """Return the page described by ``request`` or a FetchFailure."""
        ...
