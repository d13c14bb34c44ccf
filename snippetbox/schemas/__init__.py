# SnippetBox Pydantic Schemas
from snippetbox.schemas.auth import (
    ChangePasswordRequest,
    CredentialsRequest,
    DeletedUserResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from snippetbox.schemas.snippet import SnippetCreate, SnippetResponse, SnippetUpdate

__all__ = [
    "ChangePasswordRequest",
    "CredentialsRequest",
    "DeletedUserResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "SnippetCreate",
    "SnippetResponse",
    "SnippetUpdate",
    "TokenResponse",
]
