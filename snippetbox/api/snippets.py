"""Snippet endpoints. Every route requires an authenticated identity."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core import get_db
from snippetbox.middleware.auth import identity_from_request
from snippetbox.schemas.snippet import SnippetCreate, SnippetResponse, SnippetUpdate
from snippetbox.services.snippet import SnippetService, SortField, SortOrder

router = APIRouter(prefix="/snippets", tags=["snippets"])


def get_snippet_service(request: Request, db: AsyncSession = Depends(get_db)) -> SnippetService:
    timeout = request.app.state.settings.ownership_lookup_timeout_seconds
    return SnippetService(db, lookup_timeout=timeout)


@router.get("", response_model=list[SnippetResponse])
async def list_snippets(
    language: str | None = None,
    sort_by: SortField = "updated_at",
    order: SortOrder = "desc",
    identity: UUID = Depends(identity_from_request),
    service: SnippetService = Depends(get_snippet_service),
) -> list[SnippetResponse]:
    """List the caller's snippets, optionally filtered by language."""
    snippets = await service.list_by_owner(
        identity, language=language, sort_by=sort_by, order=order
    )
    return [SnippetResponse.model_validate(s) for s in snippets]


@router.post("", response_model=SnippetResponse, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    data: SnippetCreate,
    identity: UUID = Depends(identity_from_request),
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetResponse:
    """Create a snippet owned by the caller."""
    snippet = await service.create(data, owner_id=identity)
    return SnippetResponse.model_validate(snippet)


@router.get("/{snippet_id}", response_model=SnippetResponse)
async def get_snippet(
    snippet_id: UUID,
    identity: UUID = Depends(identity_from_request),
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetResponse:
    """Get one of the caller's snippets."""
    snippet = await service.get(snippet_id, owner_id=identity)
    return SnippetResponse.model_validate(snippet)


@router.put("/{snippet_id}", response_model=SnippetResponse)
async def update_snippet(
    snippet_id: UUID,
    data: SnippetUpdate,
    identity: UUID = Depends(identity_from_request),
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetResponse:
    """Replace one of the caller's snippets."""
    snippet = await service.update(snippet_id, data, owner_id=identity)
    return SnippetResponse.model_validate(snippet)


@router.delete("/{snippet_id}", response_model=SnippetResponse)
async def delete_snippet(
    snippet_id: UUID,
    identity: UUID = Depends(identity_from_request),
    service: SnippetService = Depends(get_snippet_service),
) -> SnippetResponse:
    """Delete one of the caller's snippets and return it."""
    snippet = await service.delete(snippet_id, owner_id=identity)
    return SnippetResponse.model_validate(snippet)
