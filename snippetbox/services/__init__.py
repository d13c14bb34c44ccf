# SnippetBox Services
from snippetbox.services.auth import AuthService
from snippetbox.services.credentials import extract_identity
from snippetbox.services.ownership import ensure_owner
from snippetbox.services.snippet import SnippetService
from snippetbox.services.tokens import TokenCodec

__all__ = [
    "AuthService",
    "SnippetService",
    "TokenCodec",
    "ensure_owner",
    "extract_identity",
]
