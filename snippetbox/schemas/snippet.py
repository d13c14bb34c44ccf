"""Pydantic schemas for snippets."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SnippetCreate(BaseModel):
    """Schema for creating a snippet."""

    title: str = Field(..., min_length=1, max_length=255)
    language: str = Field(..., min_length=1, max_length=64)
    content: str = Field(..., min_length=1)


class SnippetUpdate(SnippetCreate):
    """Schema for replacing a snippet's fields."""


class SnippetResponse(BaseModel):
    """Schema for snippet response. The owner is implied by the caller."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    language: str
    content: str
    created_at: datetime
    updated_at: datetime
