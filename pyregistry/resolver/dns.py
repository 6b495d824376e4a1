"""
DNS TXT record based cluster resolution.

Registry clusters publish their members in TXT records:

    txt.<region>.<domain>      "<zone>.<domain> <zone>.<domain> ..."
    txt.<zone>.<domain>        "<host> <host> ..."

With list expansion, the region record is followed down to the zone
records. Without it, the tokens of the queried record are the hosts.
"""

from __future__ import annotations

import ipaddress

import dns.exception
import dns.resolver

from ..exceptions import DnsLookupError
from ..logging import dns_logger as logger
from ..protocols import TxtQuery
from .base import ClusterResolver
from .endpoint import Endpoint


DEFAULT_ZONE = "default"
TXT_PREFIX = "txt."


def dnspython_txt_query(timeout: float = 5.0) -> TxtQuery:
    """
    Create a TXT query backed by a fresh dnspython resolver.

    Args:
        timeout: Total lifetime of a single query in seconds.

    Returns:
        Callable returning the whitespace-separated tokens of every TXT
        string found at a name. A host without resolver configuration
        fails each query with DnsLookupError.
    """

    def query(name: str) -> list[str]:
        try:
            # Reads resolv.conf, which may be missing or list no nameservers
            resolver = dns.resolver.Resolver()
            resolver.lifetime = timeout
            answer = resolver.resolve(name, "TXT")
        except dns.exception.DNSException as e:
            raise DnsLookupError("TXT lookup failed", dns_name=name, original_error=e) from e

        tokens: list[str] = []
        for rdata in answer:
            for chunk in rdata.strings:
                tokens.extend(chunk.decode("utf-8", errors="replace").split())
        return tokens

    return query


def extract_zone(name: str) -> str:
    """Get the zone encoded in the first label of a DNS name."""
    name = name.rstrip(".")
    try:
        ipaddress.ip_address(name)
        return DEFAULT_ZONE
    except ValueError:
        pass

    label, sep, _ = name.partition(".")
    if not sep or not label:
        return DEFAULT_ZONE
    return label


def _normalize_context(url_context: str) -> str:
    if url_context and not url_context.startswith("/"):
        return "/" + url_context
    return url_context


def resolve_txt_endpoints(
    region: str,
    dns_name: str,
    use_tls: bool,
    port: int,
    expand_txt_list: bool,
    url_context: str,
    *,
    query: TxtQuery | None = None,
) -> list[Endpoint]:
    """
    Resolve cluster endpoints from DNS TXT records.

    Args:
        region: Region stamped on every endpoint.
        dns_name: Name of the TXT record to start from.
        use_tls: Mark endpoints as secure.
        port: Port of every endpoint.
        expand_txt_list: Treat the record's tokens as zone names whose own
            TXT records list the hosts.
        url_context: Path of the registry API on each host.
        query: TXT lookup to use. Defaults to a fresh dnspython resolver.

    Returns:
        Endpoints in record order. Empty when the lookup fails or the
        record is empty.
    """
    if not 0 <= port <= 65535:
        logger.error("Port %d out of range for %s", port, dns_name)
        return []

    if query is None:
        query = dnspython_txt_query()
    relative_uri = _normalize_context(url_context)

    try:
        tokens = query(dns_name)
    except DnsLookupError as e:
        logger.warning("Cannot resolve TXT record %s: %s", dns_name, e)
        return []

    if expand_txt_list:
        hosts_by_zone: list[tuple[str, list[str]]] = []
        for zone_name in tokens:
            try:
                hosts = query(TXT_PREFIX + zone_name)
            except DnsLookupError as e:
                logger.warning("Cannot resolve zone TXT record for %s: %s", zone_name, e)
                continue
            hosts_by_zone.append((extract_zone(zone_name), hosts))
    else:
        hosts_by_zone = [(extract_zone(host), [host]) for host in tokens]

    endpoints = [
        Endpoint(
            host=host.rstrip("."),
            port=port,
            secure=use_tls,
            relative_uri=relative_uri,
            region=region,
            zone=zone,
        )
        for zone, hosts in hosts_by_zone
        for host in hosts
        if host.rstrip(".")
    ]

    if not endpoints:
        logger.warning("TXT record %s lists no endpoints", dns_name)
    return endpoints


class DnsTxtRecordClusterResolver(ClusterResolver):
    """
    Resolver discovering cluster endpoints through DNS TXT records.

    Cheap to construct; holds no state between calls and re-queries DNS
    on every resolution.

    Example:
        resolver = DnsTxtRecordClusterResolver(
            "us-east-1", "txt.us-east-1.registry.example.com",
            use_tls=True, port=443, expand_txt_list=True, url_context="/eureka",
        )
        endpoints = resolver.get_cluster_endpoints()
    """

    def __init__(
        self,
        region: str,
        dns_name: str,
        use_tls: bool,
        port: int,
        expand_txt_list: bool,
        url_context: str,
        *,
        query: TxtQuery | None = None,
    ):
        self._region = region
        self._dns_name = dns_name
        self._use_tls = use_tls
        self._port = port
        self._expand_txt_list = expand_txt_list
        self._url_context = url_context
        self._query = query

    def get_region(self) -> str:
        return self._region

    def get_cluster_endpoints(self) -> list[Endpoint]:
        return resolve_txt_endpoints(
            self._region,
            self._dns_name,
            self._use_tls,
            self._port,
            self._expand_txt_list,
            self._url_context,
            query=self._query,
        )
