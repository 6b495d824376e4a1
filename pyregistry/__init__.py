"""
pyregistry - Service registry cluster endpoint resolution

Works out which registry servers a client can contact, from static
zone-grouped configuration or from DNS TXT records, without hardcoding
addresses.

Subpackages:
    pyregistry.resolver - Cluster resolvers and endpoint descriptors
"""

from .config import ClientConfig
from .exceptions import (
    ConfigurationError,
    DnsLookupError,
    MalformedUrlError,
    PyRegistryError,
    ResolutionError,
)
from .logging import configure_logging, get_logger
from .protocols import DnsEndpointResolver, TxtQuery, ZoneAffinityReader
from .resolver.base import ClusterResolver, StaticClusterResolver
from .resolver.config import ConfigClusterResolver
from .resolver.dns import DnsTxtRecordClusterResolver
from .resolver.endpoint import Endpoint, ResolutionResult, ResolutionStatus
from .resolver.zones import InstanceIdentity

__all__ = [
    # Configuration
    "ClientConfig",
    "InstanceIdentity",
    # Resolvers
    "ClusterResolver",
    "ConfigClusterResolver",
    "DnsTxtRecordClusterResolver",
    "StaticClusterResolver",
    # Results
    "Endpoint",
    "ResolutionResult",
    "ResolutionStatus",
    # Protocols
    "DnsEndpointResolver",
    "TxtQuery",
    "ZoneAffinityReader",
    # Exceptions
    "PyRegistryError",
    "ConfigurationError",
    "ResolutionError",
    "MalformedUrlError",
    "DnsLookupError",
    # Logging
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
