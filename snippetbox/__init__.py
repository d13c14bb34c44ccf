"""SnippetBox - multi-tenant code snippet storage."""

__version__ = "0.1.0"
