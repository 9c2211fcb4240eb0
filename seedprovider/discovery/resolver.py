"""
Seed resolution.

Resolves the seeds of a starting Cassandra node: the addresses behind the
Kubernetes service first, and a static comma-separated list when that
lookup fails. The resolver returns a tagged result instead of exiting;
get_seeds() is the process-level entry point that turns a fatal result
into a non-zero exit.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..config import SeedProviderSettings, load_settings
from ..exceptions import AddressResolutionError, ConfigurationError, DiscoveryError
from ..logging import get_logger
from .dns import HostResolver, SeedAddress, SocketHostResolver, resolve_seed
from .endpoints import EndpointSet, EndpointSource, KubernetesEndpointSource

logger = get_logger("discovery.resolver")

# Exit status when the fallback seeds cannot be resolved
EXIT_MISCONFIGURED = 1


# =============================================================================
# Results
# =============================================================================


class SeedSource(Enum):
    """Where a seed list came from."""

    ENDPOINTS = "endpoints"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SeedList:
    """
    Successfully resolved seeds.

    Attributes:
        addresses: Resolved seeds, in discovery order. May be empty.
        source: Which path produced them.
        dropped: Endpoint addresses skipped because they did not resolve.
    """

    addresses: tuple[SeedAddress, ...]
    source: SeedSource
    dropped: int = 0

    ok = True

    def __iter__(self) -> Iterator[SeedAddress]:
        return iter(self.addresses)

    def __len__(self) -> int:
        return len(self.addresses)

    @property
    def hosts(self) -> list[str]:
        """Resolved IPs as strings."""
        return [str(address) for address in self.addresses]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary."""
        return {
            "source": self.source.value,
            "seeds": self.hosts,
            "dropped": self.dropped,
        }


@dataclass(frozen=True)
class FatalMisconfiguration:
    """
    The fallback seeds could not be resolved.

    No seed list may be used when this is returned.

    Attributes:
        reason: Human-readable description.
        token: The fallback token that failed.
    """

    reason: str
    token: str = ""

    ok = False


SeedResult = SeedList | FatalMisconfiguration


# =============================================================================
# Fallback Spec Parsing
# =============================================================================


def split_seed_spec(spec: str) -> list[str]:
    """
    Split a comma-separated seed spec into tokens.

    Tokens are stripped of surrounding whitespace and empty tokens left by
    a trailing comma are dropped. A spec with nothing in it still gives one
    empty token, so an unconfigured fallback fails to resolve instead of
    silently producing no seeds.

    Example:
        split_seed_spec("10.0.0.1, 10.0.0.2,")  # ["10.0.0.1", "10.0.0.2"]
        split_seed_spec("")                     # [""]
    """
    tokens = [token.strip() for token in spec.split(",")]
    while tokens and not tokens[-1]:
        tokens.pop()
    return tokens or [""]


# =============================================================================
# Seed Resolver
# =============================================================================


class SeedResolver:
    """
    Resolves seeds from service endpoints, falling back to a static list.

    Flow:
    - Read the endpoints of settings.service in settings.namespace.
    - On success, resolve every endpoint address. Addresses that do not
      resolve are logged and dropped. No endpoints means no seeds.
    - If the read fails, resolve each token of settings.fallback_spec.
      Any token that does not resolve makes the result fatal.

    The resolver holds no state between calls and starts no background work.

    Example:
        resolver = SeedResolver()
        result = resolver.resolve(SeedProviderSettings())
        if isinstance(result, FatalMisconfiguration):
            raise SystemExit(EXIT_MISCONFIGURED)
        print(result.hosts)
    """

    def __init__(
        self,
        endpoint_source: EndpointSource | None = None,
        host_resolver: HostResolver | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            endpoint_source: Endpoint query interface. Defaults to a
                KubernetesEndpointSource built from the settings of each call.
            host_resolver: Name resolver. Defaults to SocketHostResolver.
        """
        self.endpoint_source = endpoint_source
        self.host_resolver = host_resolver or SocketHostResolver()

    def resolve(self, settings: SeedProviderSettings) -> SeedResult:
        """
        Resolve seeds for the given parameters.

        Args:
            settings: Discovery parameters.

        Returns:
            SeedList on success, FatalMisconfiguration if the fallback
            seeds cannot be resolved.
        """
        source = self.endpoint_source or KubernetesEndpointSource(
            kubeconfig=settings.kubeconfig
        )

        try:
            endpoints = source.read(settings.namespace, settings.service)
        except DiscoveryError as e:
            logger.error(
                "Can't find endpoints for %s/%s, using fallback seeds: %s",
                settings.namespace,
                settings.service,
                e,
            )
            return self._resolve_fallback(settings.fallback_spec)

        return self._resolve_endpoints(endpoints, settings.num_seeds)

    def _resolve_endpoints(self, endpoints: EndpointSet, limit: int = 0) -> SeedList:
        """Resolve endpoint addresses, keeping only those that resolve."""
        candidates = [self._try_resolve(address) for address in endpoints.addresses()]
        seeds = [seed for seed in candidates if seed is not None]
        dropped = len(candidates) - len(seeds)

        if dropped:
            logger.warning("Dropped %d unresolvable endpoint addresses", dropped)
        if limit and len(seeds) > limit:
            logger.debug("Limiting %d endpoint seeds to %d", len(seeds), limit)
            seeds = seeds[:limit]

        logger.info("Resolved %d seeds from endpoints", len(seeds))
        return SeedList(addresses=tuple(seeds), source=SeedSource.ENDPOINTS, dropped=dropped)

    def _try_resolve(self, address: str) -> SeedAddress | None:
        try:
            return resolve_seed(self.host_resolver, address)
        except AddressResolutionError as e:
            logger.warning("Skipping endpoint address %r: %s", address, e)
            return None

    def _resolve_fallback(self, spec: str) -> SeedResult:
        """Resolve every fallback token; any failure is fatal."""
        seeds: list[SeedAddress] = []

        for token in split_seed_spec(spec):
            try:
                seeds.append(resolve_seed(self.host_resolver, token))
            except AddressResolutionError as e:
                logger.error(
                    "Can't resolve seed address %r, check CASSANDRA_SEEDS and POD_IP: %s",
                    token,
                    e,
                )
                return FatalMisconfiguration(
                    reason=f"Fallback seed {token!r} cannot be resolved: {e}",
                    token=token,
                )

        logger.info("Resolved %d fallback seeds", len(seeds))
        return SeedList(addresses=tuple(seeds), source=SeedSource.FALLBACK)


# =============================================================================
# Process Entry Point
# =============================================================================


def get_seeds(
    settings: SeedProviderSettings | None = None,
    resolver: SeedResolver | None = None,
) -> list[SeedAddress]:
    """
    Resolve seeds for this process, exiting on fatal misconfiguration.

    Settings are loaded from the environment when not given. If those
    settings are invalid, or the fallback seeds cannot be resolved, the
    process exits with EXIT_MISCONFIGURED and no list is returned.

    Returns:
        Resolved seeds, possibly empty.
    """
    if settings is None:
        try:
            settings = load_settings()
        except ConfigurationError as e:
            logger.error("Refusing to start with invalid settings: %s", e)
            sys.exit(EXIT_MISCONFIGURED)
    if resolver is None:
        resolver = SeedResolver()

    result = resolver.resolve(settings)
    if isinstance(result, FatalMisconfiguration):
        logger.error("Refusing to start with misconfigured seeds: %s", result.reason)
        sys.exit(EXIT_MISCONFIGURED)

    return list(result.addresses)
