"""
Exception classes for pyregistry.

Malformed input is recovered from locally by the resolvers; only
ConfigurationError is expected to reach callers.
"""


class PyRegistryError(Exception):
    """Base exception for all pyregistry errors."""

    pass


class ConfigurationError(PyRegistryError):
    """Raised when configuration is invalid and resolution cannot proceed."""

    pass


class ResolutionError(PyRegistryError):
    """Base exception for endpoint resolution errors."""

    pass


class MalformedUrlError(ResolutionError, ValueError):
    """
    Raised when a service URL fails generic URI syntax validation.

    Attributes:
        url: The offending URL string.
        reason: Short description of what is wrong with it.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(f"Invalid service URL: {url!r}")
        self.url = url
        self.reason = reason

    def __str__(self) -> str:
        return " | ".join([super().__str__(), f"Reason: {self.reason}"])


class DnsLookupError(ResolutionError):
    """
    Raised when a DNS TXT lookup fails.

    Attributes:
        dns_name: The name that was queried.
        original_error: The underlying resolver exception, if any.
    """

    def __init__(
        self,
        message: str,
        dns_name: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.dns_name = dns_name
        self.original_error = original_error

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.dns_name:
            parts.append(f"Name: {self.dns_name}")
        if self.original_error:
            parts.append(f"Cause: {type(self.original_error).__name__}: {self.original_error}")
        return " | ".join(parts)
