"""Middleware module for SnippetBox."""

from snippetbox.middleware.auth import AuthenticationMiddleware, identity_from_request
from snippetbox.middleware.rate_limit import AdmissionController, RateLimitMiddleware

__all__ = [
    "AdmissionController",
    "AuthenticationMiddleware",
    "RateLimitMiddleware",
    "identity_from_request",
]
