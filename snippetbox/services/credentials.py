"""Identity extraction from the Authorization header."""

from uuid import UUID

from snippetbox.services.exceptions import MalformedCredentialError, MissingCredentialError
from snippetbox.services.tokens import TokenCodec

AUTH_SCHEME = "Bearer"


def parse_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` value.

    Exactly one space separates scheme and token. Anything else is
    rejected rather than truncated.
    """
    if not authorization:
        raise MissingCredentialError("Authorization header missing")

    parts = authorization.split(" ")
    if len(parts) != 2:
        raise MalformedCredentialError("Authorization header must be 'Bearer <token>'")

    scheme, token = parts
    if scheme != AUTH_SCHEME or not token:
        raise MalformedCredentialError("Authorization header must be 'Bearer <token>'")
    return token


def extract_identity(authorization: str | None, codec: TokenCodec) -> UUID:
    """Authenticate a credential header value and return the caller's identity.

    Token errors from ``TokenCodec.verify`` propagate unchanged.
    """
    return codec.verify(parse_bearer_token(authorization))
