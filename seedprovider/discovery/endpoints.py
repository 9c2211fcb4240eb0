"""
Kubernetes Endpoints lookup.

Defines the endpoint data model, the EndpointSource protocol the resolver
queries, and the default implementation backed by the official
'kubernetes' client.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import urllib3
import yaml
from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from ..exceptions import EndpointLookupError, MalformedEndpointsError
from ..logging import get_logger

logger = get_logger("discovery.endpoints")


# =============================================================================
# Endpoint Data Model
# =============================================================================


@dataclass(frozen=True)
class EndpointSubset:
    """A group of raw addresses as returned for one service."""

    addresses: tuple[str, ...] = ()


@dataclass(frozen=True)
class EndpointSet:
    """
    Endpoints backing a service.

    Subset order and address order are kept exactly as returned.
    Addresses are not deduplicated.

    Example:
        endpoints = EndpointSet(subsets=(
            EndpointSubset(addresses=("10.0.0.1", "10.0.0.2")),
            EndpointSubset(addresses=("10.0.1.7",)),
        ))
        list(endpoints.addresses())  # ["10.0.0.1", "10.0.0.2", "10.0.1.7"]
    """

    subsets: tuple[EndpointSubset, ...] = field(default_factory=tuple)

    def addresses(self) -> Iterator[str]:
        """Iterate over every address, subset by subset."""
        for subset in self.subsets:
            yield from subset.addresses

    def __len__(self) -> int:
        return sum(len(subset.addresses) for subset in self.subsets)

    @classmethod
    def from_kubernetes(cls, endpoints: Any, service: str = "") -> EndpointSet:
        """
        Convert a V1Endpoints object.

        A missing subsets list, a subset without an addresses list, or an
        address without an IP makes the whole response malformed. An empty
        subsets list is valid and gives an empty set.

        Raises:
            MalformedEndpointsError: If an expected field is missing.
        """
        if endpoints is None:
            raise MalformedEndpointsError(f"No endpoints object returned for {service}")

        raw_subsets = getattr(endpoints, "subsets", None)
        if raw_subsets is None:
            raise MalformedEndpointsError(f"Endpoints for {service} have no subsets")

        subsets: list[EndpointSubset] = []
        for index, raw_subset in enumerate(raw_subsets):
            raw_addresses = getattr(raw_subset, "addresses", None)
            if raw_addresses is None:
                raise MalformedEndpointsError(
                    f"Subset {index} of {service} endpoints has no addresses"
                )

            addresses: list[str] = []
            for raw_address in raw_addresses:
                ip = getattr(raw_address, "ip", None)
                if ip is None:
                    raise MalformedEndpointsError(
                        f"Address in subset {index} of {service} endpoints has no ip"
                    )
                addresses.append(ip)

            subsets.append(EndpointSubset(addresses=tuple(addresses)))

        return cls(subsets=tuple(subsets))


# =============================================================================
# Endpoint Sources
# =============================================================================


@runtime_checkable
class EndpointSource(Protocol):
    """
    Query interface for the endpoints backing a service.

    Implementations raise EndpointLookupError when the query cannot be
    completed and MalformedEndpointsError when the response is unusable.
    """

    def read(self, namespace: str, service: str) -> EndpointSet:
        """Return the endpoints of `service` in `namespace`."""
        ...


class KubernetesEndpointSource:
    """
    Reads Endpoints objects from the Kubernetes API.

    Client configuration follows the usual order: in-cluster service
    account first, then the default kubeconfig. An explicit kubeconfig
    path skips the in-cluster attempt. A fresh API client is created for
    every read and closed afterwards.

    Example:
        source = KubernetesEndpointSource()
        endpoints = source.read("default", "cassandra")
        for address in endpoints.addresses():
            print(address)
    """

    def __init__(self, kubeconfig: str | None = None, context: str | None = None):
        """
        Initialize the source.

        Args:
            kubeconfig: Path of a kubeconfig file to use instead of the
                in-cluster configuration.
            context: Kubeconfig context to select.
        """
        self.kubeconfig = kubeconfig
        self.context = context

    def read(self, namespace: str, service: str) -> EndpointSet:
        """
        Read the endpoints of a service.

        Raises:
            EndpointLookupError: On configuration, transport or API errors.
            MalformedEndpointsError: If the response lacks expected fields.
        """
        raw = self._read_endpoints(namespace, service)
        endpoints = EndpointSet.from_kubernetes(raw, service=f"{namespace}/{service}")
        logger.debug(
            "Read %d addresses in %d subsets for %s/%s",
            len(endpoints),
            len(endpoints.subsets),
            namespace,
            service,
        )
        return endpoints

    def _read_endpoints(self, namespace: str, service: str) -> Any:
        """Issue the API call, mapping client failures to EndpointLookupError."""
        try:
            api_client = self._api_client()
        except (ConfigException, yaml.YAMLError, TypeError, AttributeError, ValueError, OSError) as e:
            # Unreadable or wrongly shaped kubeconfig, missing service account
            raise EndpointLookupError(
                "Kubernetes client configuration is unusable",
                namespace=namespace,
                service=service,
                original_error=e,
            ) from e

        try:
            with api_client:
                api = client.CoreV1Api(api_client)
                return api.read_namespaced_endpoints(service, namespace)
        except ApiException as e:
            raise EndpointLookupError(
                "Kubernetes API rejected the endpoints request",
                namespace=namespace,
                service=service,
                status=e.status,
                original_error=e,
            ) from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            raise EndpointLookupError(
                "Kubernetes API is not reachable",
                namespace=namespace,
                service=service,
                original_error=e,
            ) from e
        except ValueError as e:
            # Raised by client-side model validation on incomplete responses
            raise MalformedEndpointsError(
                f"Invalid endpoints response for {namespace}/{service}: {e}"
            ) from e

    def _api_client(self) -> client.ApiClient:
        """Build an API client from in-cluster or kubeconfig configuration."""
        configuration = client.Configuration()

        if self.kubeconfig:
            k8s_config.load_kube_config(
                config_file=self.kubeconfig,
                context=self.context,
                client_configuration=configuration,
            )
            return client.ApiClient(configuration)

        try:
            k8s_config.load_incluster_config(client_configuration=configuration)
        except ConfigException as e:
            logger.debug("In-cluster config unavailable (%s), trying kubeconfig", e)
            k8s_config.load_kube_config(
                context=self.context,
                client_configuration=configuration,
            )

        return client.ApiClient(configuration)
