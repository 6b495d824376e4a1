"""
Cluster resolution from client configuration, with optional DNS discovery.

ConfigClusterResolver is the resolver most clients use: it reads the
configured registry server URLs grouped by availability zone, or, when
configured to, delegates entirely to DNS TXT record discovery.
"""

from __future__ import annotations

import re
from typing import NamedTuple
from urllib.parse import unquote, urlsplit

from ..config import ClientConfig
from ..exceptions import ConfigurationError, MalformedUrlError
from ..logging import config_logger as logger
from ..protocols import DnsEndpointResolver, ZoneAffinityReader
from .base import ClusterResolver
from .dns import dnspython_txt_query, resolve_txt_endpoints
from .endpoint import DroppedUrl, Endpoint, ResolutionResult
from .zones import InstanceIdentity, own_zone, service_urls_by_zone


# RFC 3986 unreserved, reserved and percent characters
_URI_CHARS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


# =============================================================================
# URL Parsing
# =============================================================================


class ParsedUrl(NamedTuple):
    """Components of a registry server URL."""

    scheme: str
    host: str
    port: int
    path: str


def _host_of(netloc: str) -> str:
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        return hostport[: hostport.find("]") + 1]
    return hostport.partition(":")[0]


def parse_service_url(url: str) -> ParsedUrl:
    """
    Parse a registry server URL of the form scheme://host:port/path.

    The port defaults to 443 for https and 80 for anything else. The
    returned path is percent-decoded.

    Raises:
        MalformedUrlError: If the URL fails URI syntax validation or has
            no host.
    """
    if not url:
        raise MalformedUrlError(url, "empty URL")
    if not _URI_CHARS.match(url):
        raise MalformedUrlError(url, "illegal character")
    if _BAD_ESCAPE.search(url):
        raise MalformedUrlError(url, "malformed escape")

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise MalformedUrlError(url, str(e)) from e

    if parts.scheme and not _SCHEME.match(parts.scheme):
        raise MalformedUrlError(url, "illegal scheme")

    host = _host_of(parts.netloc)
    if not host:
        raise MalformedUrlError(url, "missing host")

    if port is None:
        port = 443 if parts.scheme.lower() == "https" else 80

    return ParsedUrl(scheme=parts.scheme, host=host, port=port, path=unquote(parts.path))


# =============================================================================
# Config Cluster Resolver
# =============================================================================


class ConfigClusterResolver(ClusterResolver):
    """
    Resolver that works out on demand, from configuration, what the
    registry endpoints should be.

    With ``use_dns_for_fetching_service_urls`` set, endpoints come from the
    TXT record ``txt.<region>.<server_dns_name>``. Otherwise they come
    from the configured per-zone service URLs, ordered so the caller's own
    zone is preferred. Malformed URLs are dropped and logged.

    Nothing is cached: every call resolves again from scratch.

    Example:
        config = ClientConfig(
            region="us-east-1",
            availability_zones={"us-east-1": ["us-east-1a", "us-east-1b"]},
            service_urls={"us-east-1a": ["https://node1:443/eureka"]},
        )
        resolver = ConfigClusterResolver(config, InstanceIdentity.from_env())
        for endpoint in resolver.get_cluster_endpoints():
            print(endpoint.service_url)
    """

    def __init__(
        self,
        config: ClientConfig,
        instance: InstanceIdentity | None = None,
        *,
        zone_reader: ZoneAffinityReader | None = None,
        dns_resolver: DnsEndpointResolver | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            config: Client configuration.
            instance: Identity of the calling instance, used to find its zone.
            zone_reader: Zone to URL mapping reader. Defaults to
                service_urls_by_zone.
            dns_resolver: DNS endpoint resolver. Defaults to a TXT lookup
                on a fresh dnspython resolver per call.
        """
        self._config = config
        self._instance = instance
        self._zone_reader = zone_reader or service_urls_by_zone
        self._dns_resolver = dns_resolver or self._resolve_txt

    def get_region(self) -> str:
        return self._config.region

    def get_cluster_endpoints(self) -> list[Endpoint]:
        return list(self.resolve().endpoints)

    def resolve(self) -> ResolutionResult:
        """
        Resolve endpoints along with the URLs that had to be dropped.

        Raises:
            ConfigurationError: If DNS resolution is enabled and the server
                port is not an integer or no server DNS name is configured.
        """
        if self._config.use_dns_for_fetching_service_urls:
            logger.info("Resolving registry endpoints via DNS")
            return self._resolve_from_dns()

        logger.info("Resolving registry endpoints via configuration")
        return self._resolve_from_config()

    # -------------------------------------------------------------------------
    # DNS
    # -------------------------------------------------------------------------

    def _server_port(self) -> int:
        raw = self._config.server_port
        try:
            port = int(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid registry server port: {raw!r}") from e
        if not 0 <= port <= 65535:
            raise ConfigurationError(f"Registry server port out of range: {port}")
        return port

    def _server_dns_name(self) -> str:
        name = (self._config.server_dns_name or "").strip()
        if not name:
            raise ConfigurationError("Registry server DNS name is not configured")
        return name

    def _resolve_txt(
        self,
        region: str,
        dns_name: str,
        use_tls: bool,
        port: int,
        expand_txt_list: bool,
        url_context: str,
    ) -> list[Endpoint]:
        return resolve_txt_endpoints(
            region,
            dns_name,
            use_tls,
            port,
            expand_txt_list,
            url_context,
            query=dnspython_txt_query(self._config.dns_timeout),
        )

    def _resolve_from_dns(self) -> ResolutionResult:
        region = self.get_region()
        dns_name = f"txt.{region}.{self._server_dns_name()}"
        port = self._server_port()

        endpoints = self._dns_resolver(
            region,
            dns_name,
            True,
            port,
            False,
            self._config.server_url_context,
        )

        if not endpoints:
            logger.error("Cannot resolve to any endpoints for the given DNS name: %s", dns_name)

        return ResolutionResult(endpoints=tuple(endpoints), strategy="dns")

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def _resolve_from_config(self) -> ResolutionResult:
        region = self.get_region()
        zones = self._config.get_availability_zones(region)
        my_zone = own_zone(zones, self._instance, default=self._config.default_zone)

        service_urls = self._zone_reader(self._config, my_zone, self._config.prefer_same_zone)

        endpoints: list[Endpoint] = []
        dropped: list[DroppedUrl] = []
        for zone, urls in service_urls.items():
            for url in urls:
                try:
                    parsed = parse_service_url(url)
                    endpoint = Endpoint(
                        host=parsed.host,
                        port=parsed.port,
                        secure=parsed.scheme.lower() == "https",
                        relative_uri=parsed.path,
                        region=region,
                        zone=zone,
                    )
                except ValueError as e:
                    # MalformedUrlError, or an endpoint invariant such as an empty zone
                    reason = e.reason if isinstance(e, MalformedUrlError) else str(e)
                    logger.warning(
                        "Invalid registry server URI %s (%s); removing from the server pool",
                        url,
                        reason,
                    )
                    dropped.append(DroppedUrl(zone=zone, url=url, reason=reason))
                    continue

                endpoints.append(endpoint)

        logger.debug("Config resolved to %s", endpoints)

        if not endpoints:
            logger.error(
                "Cannot resolve to any endpoints from provided configuration: %s",
                service_urls,
            )

        return ResolutionResult(
            endpoints=tuple(endpoints),
            dropped=tuple(dropped),
            strategy="config",
        )
