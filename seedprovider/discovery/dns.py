"""
Forward name resolution for seed addresses.

Uses Python's built-in socket module. IP literals are parsed directly;
hostnames go through getaddrinfo and the first result wins.
"""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..exceptions import AddressResolutionError
from ..logging import get_logger

logger = get_logger("discovery.dns")

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


# =============================================================================
# Seed Address
# =============================================================================


@dataclass(frozen=True)
class SeedAddress:
    """
    A resolved seed.

    Attributes:
        host: The raw token the address was resolved from.
        ip: The resolved IP address.

    Example:
        seed = SeedAddress(host="cassandra-0.cassandra", ip=ip_address("10.0.0.5"))
        str(seed)  # "10.0.0.5"
    """

    host: str
    ip: IPAddress

    def __str__(self) -> str:
        return str(self.ip)

    def to_dict(self) -> dict[str, str]:
        """Serialize to a dictionary."""
        return {"host": self.host, "ip": str(self.ip)}


# =============================================================================
# Host Resolvers
# =============================================================================


@runtime_checkable
class HostResolver(Protocol):
    """Resolves a host or IP token to a single address."""

    def resolve(self, host: str) -> IPAddress:
        """
        Resolve a token.

        Raises:
            AddressResolutionError: If the token cannot be resolved.
        """
        ...


class SocketHostResolver:
    """
    Resolver backed by the system resolver.

    Example:
        resolver = SocketHostResolver()
        resolver.resolve("localhost")  # IPv4Address('127.0.0.1')
    """

    def __init__(self, family: int = socket.AF_UNSPEC):
        """
        Initialize the resolver.

        Args:
            family: Address family passed to getaddrinfo.
        """
        self.family = family

    def resolve(self, host: str) -> IPAddress:
        if not host:
            raise AddressResolutionError("Cannot resolve an empty address", host=host)

        try:
            return ipaddress.ip_address(host)
        except ValueError:
            pass

        try:
            results = socket.getaddrinfo(host, None, self.family, socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise AddressResolutionError(f"Cannot resolve {host!r}: {e}", host=host) from e

        if not results:
            raise AddressResolutionError(f"No addresses for {host!r}", host=host)

        # result[4][0] is always the IP string
        address = ipaddress.ip_address(str(results[0][4][0]))
        logger.debug("Resolved %s to %s", host, address)
        return address


def resolve_seed(resolver: HostResolver, host: str) -> SeedAddress:
    """Resolve a token into a SeedAddress, raising AddressResolutionError."""
    return SeedAddress(host=host, ip=resolver.resolve(host))
