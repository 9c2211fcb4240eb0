"""Discovery parameters loaded from environment variables."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class SeedProviderSettings(BaseSettings):
    """Parameters for one seed resolution.

    Built once at the call site and passed to the resolver, which never
    reads the environment itself. Each field can also be given by name
    when constructing the settings directly.

    Environment Variables:
        CASSANDRA_SERVICE: Service whose endpoints are queried (default: cassandra)
        POD_NAMESPACE: Namespace of that service (default: default)
        CASSANDRA_SEEDS: Comma-separated fallback seed list (default: empty)
        POD_IP: Fallback seed used when CASSANDRA_SEEDS is empty (default: empty)
        CASSANDRA_SERVICE_NUM_SEEDS: Cap on seeds taken from endpoints, 0 for no cap
        SEEDPROVIDER_KUBECONFIG: Kubeconfig path, skips in-cluster config when set

    Example:
        export CASSANDRA_SERVICE="cassandra-headless"
        export POD_NAMESPACE="storage"

        from seedprovider.config import SeedProviderSettings
        settings = SeedProviderSettings()
        settings.fallback_spec
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
        frozen=True,
    )

    service: str = Field(
        default="cassandra",
        min_length=1,
        validation_alias=AliasChoices("service", "CASSANDRA_SERVICE"),
        description="Service whose endpoints are queried",
    )
    namespace: str = Field(
        default="default",
        min_length=1,
        validation_alias=AliasChoices("namespace", "POD_NAMESPACE"),
        description="Namespace of the service",
    )
    seeds: str = Field(
        default="",
        validation_alias=AliasChoices("seeds", "CASSANDRA_SEEDS"),
        description="Comma-separated fallback seed list",
    )
    pod_ip: str = Field(
        default="",
        validation_alias=AliasChoices("pod_ip", "POD_IP"),
        description="Address of this pod, the last-resort seed",
    )
    num_seeds: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("num_seeds", "CASSANDRA_SERVICE_NUM_SEEDS"),
        description="Maximum seeds taken from endpoints (0 = no limit)",
    )
    kubeconfig: str | None = Field(
        default=None,
        validation_alias=AliasChoices("kubeconfig", "SEEDPROVIDER_KUBECONFIG"),
        description="Kubeconfig file for out-of-cluster use",
    )

    @property
    def fallback_spec(self) -> str:
        """The seed list used when endpoint discovery fails.

        CASSANDRA_SEEDS when set, otherwise POD_IP. May be empty.
        """
        if self.seeds:
            return self.seeds
        return self.pod_ip

    def describe(self) -> dict[str, Any]:
        """Effective parameters, including the derived fallback spec."""
        data = self.model_dump()
        data["fallback_spec"] = self.fallback_spec
        return data


def load_settings(**overrides: Any) -> SeedProviderSettings:
    """
    Build settings from the environment, with keyword overrides on top.

    Raises:
        ConfigurationError: If any parameter is invalid.
    """
    try:
        return SeedProviderSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid seed provider settings: {e}") from e
