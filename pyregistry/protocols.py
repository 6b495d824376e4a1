"""
Protocol classes for the collaborators of the cluster resolvers.

Any callable with a matching signature can be injected into
ConfigClusterResolver, without needing the package's own implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .config import ClientConfig
    from .resolver.endpoint import Endpoint


@runtime_checkable
class TxtQuery(Protocol):
    """Protocol for DNS TXT lookups.

    Returns the whitespace-separated tokens of every TXT string found at
    the name, and raises DnsLookupError when the lookup fails.
    """

    def __call__(self, name: str) -> list[str]: ...


@runtime_checkable
class ZoneAffinityReader(Protocol):
    """Protocol for readers mapping zones to configured server URLs.

    Must be deterministic for identical inputs. With prefer_same_zone set,
    the instance zone's URLs come first.
    """

    def __call__(
        self,
        config: ClientConfig,
        instance_zone: str,
        prefer_same_zone: bool,
    ) -> dict[str, list[str]]: ...


@runtime_checkable
class DnsEndpointResolver(Protocol):
    """Protocol for DNS based endpoint resolution.

    Returns an empty sequence, never raises, when the lookup fails or
    the record is empty.
    """

    def __call__(
        self,
        region: str,
        dns_name: str,
        use_tls: bool,
        port: int,
        expand_txt_list: bool,
        url_context: str,
    ) -> Sequence[Endpoint]: ...
