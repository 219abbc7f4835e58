"""Reviews API package."""

from academy.reviews.api.routes import review_router

__all__ = ["review_router"]
