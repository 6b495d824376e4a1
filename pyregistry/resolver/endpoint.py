"""
Endpoint descriptors and resolution results.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Endpoint:
    """
    One member of a registry cluster.

    Attributes:
        host: Hostname or IP address.
        port: TCP port number.
        secure: True if the endpoint is reached over TLS.
        relative_uri: Path of the registry API on the server, may be empty.
        region: Region the endpoint was resolved for.
        zone: Availability zone the endpoint belongs to.

    Example:
        endpoint = Endpoint(
            host="node1",
            port=443,
            secure=True,
            relative_uri="/eureka",
            region="us-east-1",
            zone="us-east-1a",
        )
        endpoint.service_url  # "https://node1:443/eureka"
    """

    host: str
    port: int
    secure: bool
    relative_uri: str
    region: str
    zone: str

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("Endpoint host must not be empty")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Endpoint port out of range: {self.port}")
        if not self.region:
            raise ValueError("Endpoint region must not be empty")
        if not self.zone:
            raise ValueError("Endpoint zone must not be empty")

    @property
    def address(self) -> str:
        """Get full address as host:port."""
        return f"{self.host}:{self.port}"

    @property
    def service_url(self) -> str:
        """Get the URL of the registry API on this endpoint."""
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}:{self.port}{self.relative_uri}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize endpoint to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "secure": self.secure,
            "relative_uri": self.relative_uri,
            "region": self.region,
            "zone": self.zone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        """Deserialize endpoint from dictionary."""
        return cls(
            host=data["host"],
            port=int(data["port"]),
            secure=bool(data.get("secure", False)),
            relative_uri=data.get("relative_uri", ""),
            region=data["region"],
            zone=data["zone"],
        )


@dataclass(frozen=True)
class DroppedUrl:
    """A configured URL that was left out of the resolved endpoints."""

    zone: str
    url: str
    reason: str


class ResolutionStatus(Enum):
    """Outcome of a single resolution."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    EMPTY = "empty"


@dataclass(frozen=True)
class ResolutionResult:
    """
    Endpoints produced by one resolution, with what had to be dropped.

    An empty result is valid and means no endpoints are currently
    resolvable; callers decide how to fall back.

    Attributes:
        endpoints: Resolved endpoints in resolution order.
        dropped: URLs skipped because they could not be parsed.
        strategy: "config" or "dns".
    """

    endpoints: tuple[Endpoint, ...] = ()
    dropped: tuple[DroppedUrl, ...] = ()
    strategy: str = "config"

    @property
    def status(self) -> ResolutionStatus:
        if not self.endpoints:
            return ResolutionStatus.EMPTY
        if self.dropped:
            return ResolutionStatus.PARTIAL
        return ResolutionStatus.COMPLETE

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    @property
    def is_empty(self) -> bool:
        return not self.endpoints

    def __iter__(self) -> Iterator[Endpoint]:
        return iter(self.endpoints)

    def __len__(self) -> int:
        return len(self.endpoints)
