"""Middleware for the tinylink web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
