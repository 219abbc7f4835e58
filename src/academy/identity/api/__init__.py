"""Identity domain API package."""

from academy.identity.api.routes import router

__all__ = ["router"]
