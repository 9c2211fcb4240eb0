"""Shared fixtures for seed provider tests."""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Callable, Iterator

import pytest

from seedprovider.discovery.endpoints import EndpointSet, EndpointSubset
from seedprovider.exceptions import AddressResolutionError, DiscoveryError

ENV_VARS = (
    "CASSANDRA_SERVICE",
    "POD_NAMESPACE",
    "CASSANDRA_SEEDS",
    "POD_IP",
    "CASSANDRA_SERVICE_NUM_SEEDS",
    "SEEDPROVIDER_KUBECONFIG",
    "SEEDPROVIDER_LOG_LEVEL",
)


class FakeEndpointSource:
    """Endpoint source returning a fixed set or raising a fixed error."""

    def __init__(self, endpoints: EndpointSet | None = None, error: DiscoveryError | None = None):
        self.endpoints = endpoints if endpoints is not None else EndpointSet()
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def read(self, namespace: str, service: str) -> EndpointSet:
        self.calls.append((namespace, service))
        if self.error is not None:
            raise self.error
        return self.endpoints


class FakeHostResolver:
    """Resolves IP literals and a fixed table of names; nothing else."""

    def __init__(self, names: dict[str, str] | None = None):
        self.names = names or {}
        self.calls: list[str] = []

    def resolve(self, host: str):
        self.calls.append(host)
        if host in self.names:
            return ipaddress.ip_address(self.names[host])
        try:
            return ipaddress.ip_address(host)
        except ValueError:
            raise AddressResolutionError(f"Unknown host {host!r}", host=host) from None


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove seed provider variables inherited from the test environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("seedprovider")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def host_resolver() -> FakeHostResolver:
    return FakeHostResolver(names={"cassandra-0.cassandra": "10.0.0.10"})


@pytest.fixture
def make_endpoints() -> Callable[..., EndpointSet]:
    """Build an EndpointSet from lists of addresses, one list per subset."""

    def _make(*subsets: list[str]) -> EndpointSet:
        return EndpointSet(subsets=tuple(EndpointSubset(addresses=tuple(s)) for s in subsets))

    return _make


@pytest.fixture
def make_source() -> Callable[..., FakeEndpointSource]:
    def _make(
        endpoints: EndpointSet | None = None,
        error: DiscoveryError | None = None,
    ) -> FakeEndpointSource:
        return FakeEndpointSource(endpoints=endpoints, error=error)

    return _make
