"""Client configuration for cluster endpoint resolution via environment variables."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Key in service_urls used when a zone has no URLs of its own
DEFAULT_SERVICE_URL_KEY = "default"


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class ClientConfig(BaseSettings):
    """Registry client settings loaded from environment variables.

    All settings use the PYREGISTRY_ prefix by default. Mapping settings
    are given as JSON objects; their list values may be JSON arrays or
    comma-separated strings.

    Environment Variables:
        PYREGISTRY_USE_DNS_FOR_FETCHING_SERVICE_URLS: Resolve via DNS TXT records
        PYREGISTRY_REGION: Region this client runs in
        PYREGISTRY_AVAILABILITY_ZONES: Region -> zone list
        PYREGISTRY_SERVICE_URLS: Zone -> registry server URL list
        PYREGISTRY_SERVER_DNS_NAME: Registry DNS domain (DNS strategy)
        PYREGISTRY_SERVER_PORT: Registry server port (DNS strategy)
        PYREGISTRY_SERVER_URL_CONTEXT: Path prefix of the registry API
        PYREGISTRY_PREFER_SAME_ZONE: Put own zone's servers first
        PYREGISTRY_DEFAULT_ZONE: Zone used when none are configured
        PYREGISTRY_DNS_TIMEOUT: DNS query lifetime in seconds

    Example:
        export PYREGISTRY_REGION="us-east-1"
        export PYREGISTRY_AVAILABILITY_ZONES='{"us-east-1": "us-east-1a,us-east-1b"}'
        export PYREGISTRY_SERVICE_URLS='{"us-east-1a": "https://node1:443/eureka"}'

        # In code
        from pyregistry import ClientConfig
        config = ClientConfig()
        zones = config.get_availability_zones(config.region)
    """

    model_config = SettingsConfigDict(
        env_prefix="PYREGISTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    use_dns_for_fetching_service_urls: bool = Field(
        default=False,
        description="Discover registry servers through DNS TXT records",
    )
    region: str = Field(
        default="us-east-1",
        description="Region this client runs in",
    )
    availability_zones: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Availability zones keyed by region",
    )
    service_urls: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Registry server URLs keyed by zone",
    )

    # DNS strategy
    server_dns_name: str | None = Field(
        default=None,
        description="DNS domain holding the registry TXT records",
    )
    server_port: str | None = Field(
        default=None,
        description="Registry server port, validated when DNS resolution runs",
    )
    server_url_context: str = Field(
        default="",
        description="Path prefix of the registry API",
    )

    # Zone affinity
    prefer_same_zone: bool = Field(
        default=True,
        description="Order the client's own zone first",
    )
    default_zone: str = Field(
        default="default",
        description="Zone designation used when no zones are configured",
    )

    dns_timeout: float = Field(
        default=5.0,
        description="DNS query lifetime in seconds",
    )

    @field_validator("availability_zones", "service_urls", mode="before")
    @classmethod
    def _split_list_values(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: _split_csv(urls) for key, urls in value.items()}
        return value

    def get_availability_zones(self, region: str) -> list[str]:
        """Get the availability zones configured for a region."""
        return list(self.availability_zones.get(region, []))

    def get_service_urls(self, zone: str) -> list[str]:
        """Get server URLs for a zone, falling back to the default entry."""
        urls = self.service_urls.get(zone) or self.service_urls.get(DEFAULT_SERVICE_URL_KEY)
        return list(urls or [])

    def model_post_init(self, __context: Any) -> None:
        """Validate settings after initialization."""
        if not self.region:
            raise ValueError("Region is required")
        if not self.default_zone:
            raise ValueError("Default zone must not be empty")
