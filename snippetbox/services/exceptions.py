"""Exceptions raised by the authentication and authorization services.

Every credential or token failure is an ``UnauthorizedError`` and every
single-resource ownership failure is an ``OwnershipError``; the HTTP layer
maps each family to one response shape.
"""


class AuthError(Exception):
    """Base authentication/authorization error."""

    pass


# --- Credential and token failures (HTTP 401) ---


class UnauthorizedError(AuthError):
    """The caller could not be authenticated."""

    pass


class MissingCredentialError(UnauthorizedError):
    """No credential header on the request."""

    pass


class MalformedCredentialError(UnauthorizedError):
    """Credential header is not exactly ``Bearer <token>``."""

    pass


class TokenError(UnauthorizedError):
    """JWT token error."""

    pass


class MalformedTokenError(TokenError):
    """Token cannot be parsed into header.claims.signature."""

    pass


class InvalidSignatureError(TokenError):
    """Token signature does not match the process secret."""

    pass


class TokenExpiredError(TokenError):
    """JWT token has expired."""

    pass


class MalformedClaimsError(TokenError):
    """Token claims lack a well-formed subject identity or expiry."""

    pass


# --- Ownership failures (uniform HTTP 404) ---


class OwnershipError(AuthError):
    """A single-resource operation was refused."""

    def __init__(self, resource_id, message: str):
        super().__init__(message)
        self.resource_id = resource_id


class ResourceNotFoundError(OwnershipError):
    """No resource exists with the requested id."""

    pass


class AccessDeniedError(OwnershipError):
    """The resource exists but belongs to another identity."""

    pass


class OwnershipLookupTimeoutError(AuthError):
    """The storage backend did not answer the owner lookup in time."""

    pass


# --- Account operations ---


class InvalidCredentialsError(AuthError):
    """Invalid email or password."""

    pass


class UserExistsError(AuthError):
    """Username or email is already registered."""

    pass
