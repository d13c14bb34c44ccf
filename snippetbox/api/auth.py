"""Account endpoints: registration, login and credential-checked changes.

These routes are open (no bearer token) but still pass admission control.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.core import get_db
from snippetbox.schemas.auth import (
    ChangePasswordRequest,
    CredentialsRequest,
    DeletedUserResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from snippetbox.services.auth import AuthService
from snippetbox.services.exceptions import InvalidCredentialsError, UserExistsError
from snippetbox.services.tokens import TokenCodec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency to get auth service."""
    return AuthService(db)


def get_token_codec(request: Request) -> TokenCodec:
    """Dependency returning the codec built at application startup."""
    return request.app.state.token_codec


def _token_response(codec: TokenCodec, user_id) -> TokenResponse:
    return TokenResponse(
        token=codec.issue(user_id),
        expires_in=codec.expires_in,
        user_id=user_id,
    )


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenResponse:
    """Create an account and return a token for it.

    Returns 409 Conflict if the username or email is taken.
    """
    try:
        user = await auth_service.register(
            username=request.username,
            email=request.email,
            password=request.password,
        )
    except UserExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e

    return _token_response(codec, user.id)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenResponse:
    """Authenticate with email and password and get a token."""
    try:
        user = await auth_service.authenticate(email=request.email, password=request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from e

    logger.info(f"User logged in: {user.id}")
    return _token_response(codec, user.id)


@router.delete("/users", response_model=DeletedUserResponse)
async def delete_user(
    request: CredentialsRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> DeletedUserResponse:
    """Delete the account matching the credentials, together with its snippets."""
    try:
        user_id = await auth_service.delete_user(email=request.email, password=request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from e

    return DeletedUserResponse(user_id=user_id)


@router.put("/users/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change an account's password.

    Tokens issued before the change stay valid until they expire.
    """
    if request.password == request.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="New password must be different from the old password",
        )

    try:
        await auth_service.change_password(
            email=request.email,
            password=request.password,
            new_password=request.new_password,
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from e

    return MessageResponse(message="Password updated successfully")
