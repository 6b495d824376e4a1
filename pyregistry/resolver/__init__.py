"""
pyregistry cluster resolvers.

Resolve the endpoints of a service registry cluster either from static
configuration (grouped by availability zone) or from DNS TXT records.

Example:
    from pyregistry import ClientConfig
    from pyregistry.resolver import ConfigClusterResolver, InstanceIdentity

    config = ClientConfig(
        region="us-east-1",
        availability_zones={"us-east-1": ["us-east-1a", "us-east-1b"]},
        service_urls={
            "us-east-1a": ["https://node1:443/eureka"],
            "us-east-1b": ["http://node2:8080"],
        },
    )
    resolver = ConfigClusterResolver(
        config, InstanceIdentity(availability_zone="us-east-1b")
    )
    for endpoint in resolver.get_cluster_endpoints():
        print(endpoint.zone, endpoint.service_url)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

__all__ = [
    # Core types
    "ClusterResolver",
    "Endpoint",
    "DroppedUrl",
    "ResolutionResult",
    "ResolutionStatus",
    # Resolvers
    "ConfigClusterResolver",
    "DnsTxtRecordClusterResolver",
    "StaticClusterResolver",
    # Collaborators
    "InstanceIdentity",
    "own_zone",
    "service_urls_by_zone",
    "resolve_txt_endpoints",
    "dnspython_txt_query",
    "parse_service_url",
]


def __getattr__(name: str) -> object:
    """Lazy import resolver components."""
    if name in ("Endpoint", "DroppedUrl", "ResolutionResult", "ResolutionStatus"):
        from .endpoint import DroppedUrl, Endpoint, ResolutionResult, ResolutionStatus

        return locals()[name]

    if name in ("ClusterResolver", "StaticClusterResolver"):
        from .base import ClusterResolver, StaticClusterResolver

        return locals()[name]

    if name in ("InstanceIdentity", "own_zone", "service_urls_by_zone"):
        from .zones import InstanceIdentity, own_zone, service_urls_by_zone

        return locals()[name]

    if name in ("DnsTxtRecordClusterResolver", "resolve_txt_endpoints", "dnspython_txt_query"):
        from .dns import DnsTxtRecordClusterResolver, dnspython_txt_query, resolve_txt_endpoints

        return locals()[name]

    if name in ("ConfigClusterResolver", "parse_service_url"):
        from .config import ConfigClusterResolver, parse_service_url

        return locals()[name]

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if TYPE_CHECKING:
    from .base import ClusterResolver, StaticClusterResolver
    from .config import ConfigClusterResolver, parse_service_url
    from .dns import DnsTxtRecordClusterResolver, dnspython_txt_query, resolve_txt_endpoints
    from .endpoint import DroppedUrl, Endpoint, ResolutionResult, ResolutionStatus
    from .zones import InstanceIdentity, own_zone, service_urls_by_zone
