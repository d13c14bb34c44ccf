"""Snippet model - a piece of code owned by exactly one user."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snippetbox.models.base import BaseModel

if TYPE_CHECKING:
    from snippetbox.models.user import User


class Snippet(BaseModel):
    """A stored code snippet.

    owner_id is set at creation and never reassigned.
    """

    __tablename__ = "snippets"

    owner_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    language: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner: Mapped["User"] = relationship("User", back_populates="snippets")

    def __repr__(self) -> str:
        return f"<Snippet {self.title} ({self.language}, owner_id={self.owner_id})>"
