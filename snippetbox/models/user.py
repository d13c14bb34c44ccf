"""User model for authentication."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snippetbox.models.base import BaseModel

if TYPE_CHECKING:
    from snippetbox.models.snippet import Snippet


class User(BaseModel):
    """A registered account.

    The primary key is the identity carried in issued tokens.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(30), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    snippets: Mapped[list["Snippet"]] = relationship(
        "Snippet", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User {self.username}>"
