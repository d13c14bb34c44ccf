"""Snippet service - owner-scoped storage for code snippets."""

import logging
from typing import Literal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.models.snippet import Snippet
from snippetbox.schemas.snippet import SnippetCreate, SnippetUpdate
from snippetbox.services.exceptions import ResourceNotFoundError
from snippetbox.services.ownership import ensure_owner

logger = logging.getLogger(__name__)

SortField = Literal["title", "language", "created_at", "updated_at"]
SortOrder = Literal["asc", "desc"]

_SORT_COLUMNS = {
    "title": Snippet.title,
    "language": Snippet.language,
    "created_at": Snippet.created_at,
    "updated_at": Snippet.updated_at,
}


class SnippetService:
    """Data access for snippets.

    Every method takes the caller's identity. Operations on a single
    snippet are guarded by ``ensure_owner`` before they touch the row.
    """

    def __init__(self, db: AsyncSession, lookup_timeout: float | None = None):
        self.db = db
        self.lookup_timeout = lookup_timeout

    async def find_owner(self, snippet_id: UUID) -> UUID | None:
        """Return the owner of a snippet, or None if it does not exist."""
        result = await self.db.execute(select(Snippet.owner_id).where(Snippet.id == snippet_id))
        return result.scalar_one_or_none()

    async def _guard(self, snippet_id: UUID, owner_id: UUID) -> None:
        await ensure_owner(snippet_id, owner_id, self.find_owner, timeout=self.lookup_timeout)

    async def create(self, data: SnippetCreate, owner_id: UUID) -> Snippet:
        """Create a snippet owned by ``owner_id``."""
        snippet = Snippet(
            owner_id=owner_id,
            title=data.title,
            language=data.language,
            content=data.content,
        )
        self.db.add(snippet)
        await self.db.flush()
        await self.db.refresh(snippet)

        logger.info(f"Created snippet {snippet.id} for {owner_id}")
        return snippet

    async def list_by_owner(
        self,
        owner_id: UUID,
        language: str | None = None,
        sort_by: SortField = "updated_at",
        order: SortOrder = "desc",
    ) -> list[Snippet]:
        """List the caller's snippets, optionally filtered by language."""
        column = _SORT_COLUMNS[sort_by]
        query = select(Snippet).where(Snippet.owner_id == owner_id)
        if language is not None:
            query = query.where(Snippet.language == language)
        query = query.order_by(column.asc() if order == "asc" else column.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, snippet_id: UUID, owner_id: UUID) -> Snippet:
        """Get one of the caller's snippets."""
        await self._guard(snippet_id, owner_id)

        result = await self.db.execute(
            select(Snippet).where(Snippet.id == snippet_id, Snippet.owner_id == owner_id)
        )
        snippet = result.scalar_one_or_none()
        if snippet is None:
            # Deleted between the ownership check and the read
            raise ResourceNotFoundError(snippet_id, f"Resource {snippet_id} not found")
        return snippet

    async def update(self, snippet_id: UUID, data: SnippetUpdate, owner_id: UUID) -> Snippet:
        """Replace title, language and content of one of the caller's snippets."""
        snippet = await self.get(snippet_id, owner_id)

        snippet.title = data.title
        snippet.language = data.language
        snippet.content = data.content
        await self.db.flush()
        await self.db.refresh(snippet)

        logger.info(f"Updated snippet {snippet_id}")
        return snippet

    async def delete(self, snippet_id: UUID, owner_id: UUID) -> Snippet:
        """Delete one of the caller's snippets and return it as it was."""
        snippet = await self.get(snippet_id, owner_id)

        await self.db.delete(snippet)
        await self.db.flush()

        logger.info(f"Deleted snippet {snippet_id}")
        return snippet
