"""Common utilities for the link service."""

from .validators import is_valid_url, is_valid_code
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_code",
    "setup_logging",
]
