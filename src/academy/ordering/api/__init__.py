"""Ordering API package."""

from academy.ordering.api.routes import router

__all__ = ["router"]
