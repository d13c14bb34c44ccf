"""Account service: registration, login and credential-checked account changes."""

import logging
from uuid import UUID

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError
from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.models.snippet import Snippet
from snippetbox.models.user import User
from snippetbox.services.exceptions import InvalidCredentialsError, UserExistsError

logger = logging.getLogger(__name__)

# Argon2 password hasher with recommended parameters
# Memory: 64 MiB, Time: 3 iterations, Parallelism: 4
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    hash_len=32,
    salt_len=16,
)

# Verified against when the email is unknown so both paths cost one hash check
_DUMMY_HASH = ph.hash("dummy-password-for-timing")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison."""
    try:
        ph.verify(password_hash, password)
        return True
    except VerificationError:
        return False


class AuthService:
    """Service for account operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, username: str, email: str, password: str) -> User:
        """Create a new user account."""
        result = await self.session.execute(
            select(User.id).where(or_(User.username == username, User.email == email))
        )
        if result.first() is not None:
            raise UserExistsError("Username or email already registered")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            await self.session.rollback()
            raise UserExistsError("Username or email already registered") from e
        await self.session.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user and return the user object.

        Raises InvalidCredentialsError for both "user not found" and
        "wrong password" to prevent user enumeration.
        """
        user = await self.get_user_by_email(email)

        if user is None:
            verify_password(password, _DUMMY_HASH)
            raise InvalidCredentialsError("Invalid credentials")

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")

        return user

    async def delete_user(self, email: str, password: str) -> UUID:
        """Delete the account matching the credentials, with all its snippets."""
        user = await self.authenticate(email, password)
        user_id = user.id

        await self.session.execute(delete(Snippet).where(Snippet.owner_id == user_id))
        await self.session.delete(user)
        await self.session.flush()

        logger.info(f"Deleted user {user_id}")
        return user_id

    async def change_password(self, email: str, password: str, new_password: str) -> None:
        """Replace the password of the account matching the credentials.

        Tokens already issued stay valid until they expire.
        """
        user = await self.authenticate(email, password)
        user.password_hash = hash_password(new_password)
        await self.session.flush()

        logger.info(f"Password changed for user {user.id}")
