"""
Exception types for erp-core.

Date helpers never raise these on bad data (they degrade to a safe value);
the strict parsers and the credential adapters do.
"""


class ErpError(Exception):
    """Base class for all erp-core errors."""


class InvalidDateError(ErpError, ValueError):
    """
    Raised by strict date parsing when a string is not an ISO date.

    Attributes:
        value: The rejected input
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid ISO date: {value!r} (expected YYYY-MM-DD)")


class AuthFailure(ErpError):
    """Raised when a stored credential is rejected or sign-out fails."""


class ConfigurationError(ErpError):
    """Raised when settings cannot be loaded from the environment."""
