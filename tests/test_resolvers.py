"""
Tests for the ClusterResolver interface, static resolver and protocols.
"""

import pytest

from pyregistry import (
    ClusterResolver,
    ConfigClusterResolver,
    DnsEndpointResolver,
    DnsTxtRecordClusterResolver,
    StaticClusterResolver,
    TxtQuery,
    ZoneAffinityReader,
)
from pyregistry.exceptions import (
    DnsLookupError,
    MalformedUrlError,
    PyRegistryError,
    ResolutionError,
)
from pyregistry.resolver.dns import resolve_txt_endpoints
from pyregistry.resolver.endpoint import Endpoint
from pyregistry.resolver.zones import service_urls_by_zone


class TestClusterResolver:
    """Tests for the resolver interface."""

    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            ClusterResolver()  # type: ignore[abstract]

    @pytest.mark.parametrize(
        "resolver_cls",
        [ConfigClusterResolver, DnsTxtRecordClusterResolver, StaticClusterResolver],
    )
    def test_variants_implement_interface(self, resolver_cls) -> None:
        assert issubclass(resolver_cls, ClusterResolver)


class TestStaticClusterResolver:
    """Tests for StaticClusterResolver."""

    def test_returns_fixed_endpoints(self) -> None:
        endpoint = Endpoint("node1", 8080, False, "", "us-east-1", "us-east-1a")
        resolver = StaticClusterResolver("us-east-1", [endpoint])

        assert resolver.get_region() == "us-east-1"
        assert resolver.get_cluster_endpoints() == [endpoint]

    def test_returned_list_is_fresh(self) -> None:
        """Callers own the returned list."""
        endpoint = Endpoint("node1", 8080, False, "", "us-east-1", "us-east-1a")
        resolver = StaticClusterResolver("us-east-1", [endpoint])

        resolver.get_cluster_endpoints().clear()

        assert resolver.get_cluster_endpoints() == [endpoint]

    def test_from_service_url(self) -> None:
        resolver = StaticClusterResolver.from_service_url(
            "https://registry.example.com/eureka/v2", region="eu-west-1"
        )

        assert resolver.get_cluster_endpoints() == [
            Endpoint("registry.example.com", 443, True, "/eureka/v2", "eu-west-1", "default")
        ]

    def test_from_malformed_service_url(self) -> None:
        with pytest.raises(MalformedUrlError):
            StaticClusterResolver.from_service_url("not a url", region="eu-west-1")


class TestProtocols:
    """Package collaborators satisfy the structural protocols."""

    def test_collaborators_match_protocols(self) -> None:
        assert isinstance(service_urls_by_zone, ZoneAffinityReader)
        assert isinstance(resolve_txt_endpoints, DnsEndpointResolver)
        assert isinstance(lambda name: [], TxtQuery)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self) -> None:
        assert issubclass(ResolutionError, PyRegistryError)
        assert issubclass(MalformedUrlError, ResolutionError)
        assert issubclass(MalformedUrlError, ValueError)
        assert issubclass(DnsLookupError, ResolutionError)

    def test_malformed_url_message(self) -> None:
        error = MalformedUrlError("bad url", "illegal character")

        assert error.url == "bad url"
        assert str(error) == "Invalid service URL: 'bad url' | Reason: illegal character"

    def test_dns_lookup_message(self) -> None:
        cause = OSError("timed out")
        error = DnsLookupError("TXT lookup failed", dns_name="txt.x", original_error=cause)

        assert str(error) == "TXT lookup failed | Name: txt.x | Cause: OSError: timed out"
