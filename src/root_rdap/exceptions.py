"""
Exception classes for the root zone RDAP generator.

All exceptions inherit from RootRDAPError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class RootRDAPError(Exception):
    """Base exception for all generator errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(RootRDAPError):
    """Raised when the target directory or configuration is unusable."""

    pass


class NetworkError(RootRDAPError):
    """Raised when fetching the TLD list, whois data or reference data fails."""

    pass


class WhoisParseError(RootRDAPError):
    """
    Raised when a whois response contains an unrecognised key or status.

    Fatal for the whole run: an unknown key usually means the whois format
    changed, and every later TLD would be converted wrongly.
    """

    pass


class OutputError(RootRDAPError):
    """Raised when a cache or output file cannot be written."""

    pass
