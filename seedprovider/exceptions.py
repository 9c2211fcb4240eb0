"""
Exception classes for the seed provider.

Primary-path failures derive from DiscoveryError and are recovered by the
resolver. AddressResolutionError is raised per address; whether it is fatal
depends on which path raised it.
"""


class SeedProviderError(Exception):
    """Base exception for all seed provider errors."""

    pass


class ConfigurationError(SeedProviderError):
    """Raised when discovery parameters are invalid."""

    pass


class DiscoveryError(SeedProviderError):
    """Base exception for endpoint discovery errors."""

    pass


class EndpointLookupError(DiscoveryError):
    """
    Raised when the endpoints query fails in transport or at the API.

    Attributes:
        namespace: Namespace that was queried.
        service: Service whose endpoints were requested.
        status: HTTP status returned by the API server, if any.
        original_error: The underlying exception.
    """

    def __init__(
        self,
        message: str,
        namespace: str | None = None,
        service: str | None = None,
        status: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.namespace = namespace
        self.service = service
        self.status = status
        self.original_error = original_error

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.service:
            parts.append(f"Service: {self.namespace}/{self.service}")
        if self.status is not None:
            parts.append(f"Status: {self.status}")
        if self.original_error:
            parts.append(f"Cause: {type(self.original_error).__name__}: {self.original_error}")
        return " | ".join(parts)


class MalformedEndpointsError(DiscoveryError):
    """Raised when an endpoints response lacks an expected field."""

    pass


class AddressResolutionError(SeedProviderError):
    """
    Raised when a host or IP token cannot be resolved to an address.

    Attributes:
        host: The token that failed to resolve.
    """

    def __init__(self, message: str, host: str = ""):
        super().__init__(message)
        self.host = host
