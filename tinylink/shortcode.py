"""Random short code generation."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes.

    Codes are not guaranteed to be unique; the registrar checks them
    against the store.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (a seeded one makes tests repeatable)
        """
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each position is drawn independently and uniformly from BASE62_CHARS.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return "".join(self.rng.choices(self.BASE62_CHARS, k=length))


def generate_random_code(length: int = 6) -> str:
    """Generate a random alphanumeric code of ``length`` characters."""
    return ShortCodeGenerator(default_length=length).generate_random()
