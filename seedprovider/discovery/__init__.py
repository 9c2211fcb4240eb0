"""
Seed discovery package.

Resolves Cassandra seeds from Kubernetes service endpoints, with a static
fallback list.

Example:
    from seedprovider.config import load_settings
    from seedprovider.discovery import SeedResolver, FatalMisconfiguration

    result = SeedResolver().resolve(load_settings())
    if isinstance(result, FatalMisconfiguration):
        raise SystemExit(1)

    for seed in result:
        print(seed)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy imports keep the Kubernetes client out of plain imports
__all__ = [
    # Resolver
    "SeedResolver",
    "SeedResult",
    "SeedList",
    "SeedSource",
    "FatalMisconfiguration",
    "get_seeds",
    "split_seed_spec",
    "EXIT_MISCONFIGURED",
    # Endpoints
    "EndpointSet",
    "EndpointSubset",
    "EndpointSource",
    "KubernetesEndpointSource",
    # Name resolution
    "SeedAddress",
    "HostResolver",
    "SocketHostResolver",
]


def __getattr__(name: str) -> object:
    """Lazy import discovery components."""
    if name in (
        "SeedResolver",
        "SeedResult",
        "SeedList",
        "SeedSource",
        "FatalMisconfiguration",
        "get_seeds",
        "split_seed_spec",
        "EXIT_MISCONFIGURED",
    ):
        from .resolver import (
            EXIT_MISCONFIGURED,
            FatalMisconfiguration,
            SeedList,
            SeedResolver,
            SeedResult,
            SeedSource,
            get_seeds,
            split_seed_spec,
        )

        return locals()[name]

    if name in ("EndpointSet", "EndpointSubset", "EndpointSource", "KubernetesEndpointSource"):
        from .endpoints import (
            EndpointSet,
            EndpointSource,
            EndpointSubset,
            KubernetesEndpointSource,
        )

        return locals()[name]

    if name in ("SeedAddress", "HostResolver", "SocketHostResolver"):
        from .dns import HostResolver, SeedAddress, SocketHostResolver

        return locals()[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if TYPE_CHECKING:
    from .dns import HostResolver, SeedAddress, SocketHostResolver
    from .endpoints import (
        EndpointSet,
        EndpointSource,
        EndpointSubset,
        KubernetesEndpointSource,
    )
    from .resolver import (
        EXIT_MISCONFIGURED,
        FatalMisconfiguration,
        SeedList,
        SeedResolver,
        SeedResult,
        SeedSource,
        get_seeds,
        split_seed_spec,
    )
