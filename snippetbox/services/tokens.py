"""Stateless identity tokens (compact HMAC-signed JWTs).

A token asserts one subject identity and an expiry. Nothing is stored
server-side: a token stays valid until it expires, there is no early
revocation.
"""

import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from snippetbox.core.config import Settings
from snippetbox.services.exceptions import (
    InvalidSignatureError,
    MalformedClaimsError,
    MalformedTokenError,
    TokenExpiredError,
)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

# Expiry is checked against the injected clock below, not by PyJWT
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


def utc_now() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """Issues and verifies identity tokens with a process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime
        self._clock = clock

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenCodec":
        return cls(
            secret_key=config.jwt_secret_key,
            algorithm=config.jwt_algorithm,
            lifetime=timedelta(minutes=config.jwt_token_expire_minutes),
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.lifetime.total_seconds())

    def issue(self, identity: UUID) -> str:
        """Create a signed token for ``identity`` expiring after the lifetime."""
        issued_at = self._clock()
        payload = {
            "sub": str(identity),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.lifetime).timestamp()),
        }
        # PyJWT 2.x returns str; older type stubs may declare bytes
        return str(jwt.encode(payload, self._secret_key, algorithm=self.algorithm))

    def verify(self, token: str) -> UUID:
        """Verify ``token`` and return the identity it was issued for.

        Raises MalformedTokenError, InvalidSignatureError, TokenExpiredError
        or MalformedClaimsError, checked in that order.
        """
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError("Token signature does not match") from e
        except jwt.InvalidAlgorithmError as e:
            raise MalformedTokenError(f"Unexpected token algorithm: {e}") from e
        except jwt.PyJWTError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e

        expiry = payload.get("exp")
        if isinstance(expiry, bool) or not isinstance(expiry, (int, float)):
            raise MalformedClaimsError("Token missing expiry")
        # NaN compares false against any clock and would never expire
        if not math.isfinite(expiry):
            raise MalformedClaimsError("Token expiry is not a finite timestamp")
        if self._clock().timestamp() > expiry:
            raise TokenExpiredError("Token has expired")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise MalformedClaimsError("Token missing subject identity")
        try:
            identity = UUID(subject)
        except ValueError as e:
            raise MalformedClaimsError("Token subject is not a valid identity") from e
        # Only the canonical form is ever issued
        if str(identity) != subject:
            raise MalformedClaimsError("Token subject is not a valid identity")

        return identity
