# SnippetBox Models
from snippetbox.models.base import BaseModel
from snippetbox.models.snippet import Snippet
from snippetbox.models.user import User

__all__ = [
    "BaseModel",
    "Snippet",
    "User",
]
