"""Enrollments API package."""

from academy.learning.api.routes import enrollment_router

__all__ = ["enrollment_router"]
