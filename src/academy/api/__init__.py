"""Shared HTTP plumbing for the academy API."""

from academy.api.errors import register_error_handlers

__all__ = ["register_error_handlers"]
