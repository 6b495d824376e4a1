"""
Abstract cluster resolver interface for pyregistry.

Defines the capability every endpoint resolution strategy provides.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .endpoint import Endpoint

# =============================================================================
# Abstract Resolver Interface
# =============================================================================


class ClusterResolver(ABC):
    """
    Abstract base class for cluster resolvers.

    A resolver answers "what are the candidate registry endpoints right
    now". It does not pick one, cache results or check endpoint health.

    Example Implementation:
        class FileClusterResolver(ClusterResolver):
            def get_region(self) -> str:
                return self._region

            def get_cluster_endpoints(self) -> list[Endpoint]:
                with open(self._path) as f:
                    return [Endpoint.from_dict(d) for d in json.load(f)]
    """

    @abstractmethod
    def get_region(self) -> str:
        """
        Get the region this resolver resolves for.

        Must not fail; implementations fall back to configured defaults.
        """
        pass

    @abstractmethod
    def get_cluster_endpoints(self) -> list[Endpoint]:
        """
        Resolve the current cluster endpoints.

        Returns:
            Endpoints in resolution order. Empty when nothing could be
            resolved; that is reported through logging, not raised.
        """
        pass


# =============================================================================
# Static Resolver
# =============================================================================


class StaticClusterResolver(ClusterResolver):
    """
    Resolver over a fixed list of endpoints.

    Example:
        resolver = StaticClusterResolver.from_service_url(
            "https://registry.example.com:443/eureka", region="us-east-1"
        )
        resolver.get_cluster_endpoints()
    """

    def __init__(self, region: str, endpoints: Iterable[Endpoint]):
        self._region = region
        self._endpoints = tuple(endpoints)

    def get_region(self) -> str:
        return self._region

    def get_cluster_endpoints(self) -> list[Endpoint]:
        return list(self._endpoints)

    @classmethod
    def from_service_url(
        cls,
        service_url: str,
        region: str,
        zone: str = "default",
    ) -> StaticClusterResolver:
        """
        Create a resolver for a single registry URL.

        Raises:
            MalformedUrlError: If the URL is not a valid URI.
        """
        from .config import parse_service_url

        parsed = parse_service_url(service_url)
        endpoint = Endpoint(
            host=parsed.host,
            port=parsed.port,
            secure=parsed.scheme.lower() == "https",
            relative_uri=parsed.path,
            region=region,
            zone=zone,
        )
        return cls(region, [endpoint])
