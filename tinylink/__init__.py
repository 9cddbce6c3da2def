"""Core logic for the tinylink URL shortener."""

from .shortcode import ShortCodeGenerator, generate_random_code
from .resolver import LinkResolver, RedirectTarget
from .registrar import LinkRegistrar

__all__ = [
    "ShortCodeGenerator",
    "generate_random_code",
    "LinkResolver",
    "RedirectTarget",
    "LinkRegistrar",
]
