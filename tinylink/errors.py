"""Error taxonomy for link registration and resolution."""

from typing import Optional


class LinkError(Exception):
    """Base class for all link errors.

    ``error_type`` is the stable identifier reported to API callers.
    """

    error_type = "InternalError"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldError(LinkError, ValueError):
    error_type = "MissingField"
    default_message = "Target URL is required"


class InvalidUrlError(LinkError, ValueError):
    error_type = "InvalidUrl"
    default_message = "Invalid URL format. Must be a valid HTTP or HTTPS URL"


class InvalidCodeError(LinkError, ValueError):
    error_type = "InvalidCode"
    default_message = "Invalid code format. Must be 6-8 alphanumeric characters"


class CodeTakenError(LinkError):
    error_type = "CodeTaken"
    default_message = "This short code is already taken. Please choose another"


class GenerationExhaustedError(LinkError):
    error_type = "GenerationExhausted"
    default_message = "Failed to generate unique code. Please try again"


class LinkNotFoundError(LinkError, LookupError):
    error_type = "NotFound"
    default_message = "Link not found"


class StoreError(LinkError):
    """Storage or transport failure. Detail goes to the log, not the caller."""


class DuplicateKeyError(StoreError):
    """Raised by a store when ``create`` hits an existing code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Code already exists: {code}")
