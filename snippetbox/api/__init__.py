# SnippetBox API routers
from snippetbox.api.auth import router as auth_router
from snippetbox.api.health import router as health_router
from snippetbox.api.snippets import router as snippets_router

__all__ = [
    "auth_router",
    "health_router",
    "snippets_router",
]
