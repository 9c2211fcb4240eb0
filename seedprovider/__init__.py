"""
seedprovider - Kubernetes seed discovery for Cassandra

Resolves the addresses a starting Cassandra node should contact to join
its cluster, from the endpoints of a Kubernetes service or from a static
fallback list.

Subpackages:
    seedprovider.discovery - Endpoint lookup, name resolution, seed resolver
"""

from .config import SeedProviderSettings, load_settings
from .exceptions import (
    AddressResolutionError,
    ConfigurationError,
    DiscoveryError,
    EndpointLookupError,
    MalformedEndpointsError,
    SeedProviderError,
)
from .logging import configure_logging, get_logger

__all__ = [
    # Configuration
    "SeedProviderSettings",
    "load_settings",
    # Exceptions
    "SeedProviderError",
    "ConfigurationError",
    "DiscoveryError",
    "EndpointLookupError",
    "MalformedEndpointsError",
    "AddressResolutionError",
    # Logging
    "configure_logging",
    "get_logger",
    # Entry point
    "get_seeds",
    # Subpackages (access via seedprovider.discovery)
    "discovery",
]

__version__ = "0.1.0"


# Lazy loading keeps the Kubernetes client out of plain imports
def __getattr__(name: str) -> object:
    """Lazy import the discovery subpackage."""
    if name == "discovery":
        from . import discovery
        return discovery
    if name == "get_seeds":
        from .discovery.resolver import get_seeds
        return get_seeds
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
