"""
Zone lookup and zone-affinity ordering of configured server URLs.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass

from ..config import ClientConfig
from ..logging import zones_logger as logger


# =============================================================================
# Instance Identity
# =============================================================================


@dataclass(frozen=True)
class InstanceIdentity:
    """
    Identity of the instance running the registry client.

    Attributes:
        instance_id: Unique identifier for this instance.
        host_name: Hostname of this instance.
        availability_zone: Zone reported by data-center metadata, if any.
        data_center: "amazon" for cloud instances, "my_own" otherwise.

    Environment Variables:
        PYREGISTRY_INSTANCE_ID
        PYREGISTRY_INSTANCE_HOST
        PYREGISTRY_INSTANCE_ZONE
        PYREGISTRY_INSTANCE_DATA_CENTER
    """

    instance_id: str = ""
    host_name: str = ""
    availability_zone: str | None = None
    data_center: str = "my_own"

    @classmethod
    def from_env(cls) -> InstanceIdentity:
        """Load identity from environment variables."""
        host_name = os.getenv("PYREGISTRY_INSTANCE_HOST", "")
        if not host_name:
            try:
                host_name = socket.gethostname()
            except OSError:
                host_name = "localhost"

        return cls(
            instance_id=os.getenv("PYREGISTRY_INSTANCE_ID", host_name),
            host_name=host_name,
            availability_zone=os.getenv("PYREGISTRY_INSTANCE_ZONE") or None,
            data_center=os.getenv("PYREGISTRY_INSTANCE_DATA_CENTER", "my_own"),
        )


def own_zone(
    availability_zones: list[str],
    instance: InstanceIdentity | None,
    default: str = "default",
) -> str:
    """
    Determine which configured zone an instance belongs to.

    Args:
        availability_zones: Zones configured for the client's region.
        instance: Identity of the calling instance.
        default: Zone returned when no zones are configured.

    Returns:
        The configured spelling of the instance's zone. Falls back to the
        first configured zone when the instance's zone is unknown, and to
        ``default`` when there are no zones at all.
    """
    if not availability_zones:
        return default

    if instance is not None and instance.availability_zone:
        wanted = instance.availability_zone.strip().lower()
        for zone in availability_zones:
            if zone.lower() == wanted:
                return zone
        logger.debug(
            "Instance zone %s not among configured zones %s",
            instance.availability_zone,
            availability_zones,
        )

    return availability_zones[0]


# =============================================================================
# Zone Affinity
# =============================================================================


def _zone_offset(instance_zone: str | None, prefer_same_zone: bool, zones: list[str]) -> int:
    for i, zone in enumerate(zones):
        if instance_zone is not None and (
            zone.lower() == instance_zone.strip().lower()
        ) == prefer_same_zone:
            return i

    logger.warning(
        "Could not pick a zone based on preferred zone settings. "
        "My zone - %s, prefer same zone - %s. Defaulting to %s",
        instance_zone,
        prefer_same_zone,
        zones[0],
    )
    return 0


def service_urls_by_zone(
    config: ClientConfig,
    instance_zone: str,
    prefer_same_zone: bool,
) -> dict[str, list[str]]:
    """
    Map configured zones to their server URLs, in zone-affinity order.

    Zones are visited round-robin starting from the instance's own zone
    when prefer_same_zone is set, or from the first other zone when it is
    not. Zones without any URLs are left out.

    Args:
        config: Client configuration.
        instance_zone: Zone of the calling instance.
        prefer_same_zone: Start from the instance's own zone.

    Returns:
        Ordered mapping of zone to URL list. Empty if nothing is configured.
    """
    zones = config.get_availability_zones(config.region) or [config.default_zone]
    start = _zone_offset(instance_zone, prefer_same_zone, zones)

    ordered: dict[str, list[str]] = {}
    for step in range(len(zones)):
        zone = zones[(start + step) % len(zones)]
        urls = config.get_service_urls(zone)
        if urls:
            ordered[zone] = urls

    if not ordered:
        logger.warning("No service URLs configured for zones %s", zones)

    return ordered
