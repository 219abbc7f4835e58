"""Catalogue API package."""

from academy.catalogue.api.routes import course_router, product_router

__all__ = ["product_router", "course_router"]
