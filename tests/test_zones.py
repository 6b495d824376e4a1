"""
Tests for own-zone lookup and zone-affinity ordering.
"""

import logging

from pyregistry import ClientConfig
from pyregistry.resolver.zones import InstanceIdentity, own_zone, service_urls_by_zone

ZONES = ["us-east-1a", "us-east-1b", "us-east-1c"]


def make_config(**overrides) -> ClientConfig:
    values = {
        "region": "us-east-1",
        "availability_zones": {"us-east-1": ZONES},
        "service_urls": {
            "us-east-1a": ["http://a1:8080", "http://a2:8080"],
            "us-east-1b": ["http://b1:8080"],
            "us-east-1c": ["http://c1:8080"],
        },
    }
    values.update(overrides)
    return ClientConfig(**values)


class TestInstanceIdentity:
    """Tests for InstanceIdentity."""

    def test_identity_from_env(self, monkeypatch) -> None:
        """Identity can be loaded from environment."""
        monkeypatch.setenv("PYREGISTRY_INSTANCE_ID", "i-123")
        monkeypatch.setenv("PYREGISTRY_INSTANCE_HOST", "10.0.0.5")
        monkeypatch.setenv("PYREGISTRY_INSTANCE_ZONE", "us-east-1b")
        monkeypatch.setenv("PYREGISTRY_INSTANCE_DATA_CENTER", "amazon")

        identity = InstanceIdentity.from_env()

        assert identity.instance_id == "i-123"
        assert identity.host_name == "10.0.0.5"
        assert identity.availability_zone == "us-east-1b"
        assert identity.data_center == "amazon"

    def test_identity_from_env_defaults(self, monkeypatch) -> None:
        """Without a zone variable the identity has no zone."""
        monkeypatch.setenv("PYREGISTRY_INSTANCE_HOST", "host-1")

        identity = InstanceIdentity.from_env()

        assert identity.instance_id == "host-1"
        assert identity.availability_zone is None
        assert identity.data_center == "my_own"


class TestOwnZone:
    """Tests for own_zone."""

    def test_matching_zone(self) -> None:
        """An instance in a configured zone gets that zone."""
        identity = InstanceIdentity(availability_zone="us-east-1b")

        assert own_zone(ZONES, identity) == "us-east-1b"

    def test_matching_is_case_insensitive(self) -> None:
        """Matching ignores case and returns the configured spelling."""
        identity = InstanceIdentity(availability_zone=" US-EAST-1C ")

        assert own_zone(ZONES, identity) == "us-east-1c"

    def test_unknown_zone_falls_back_to_first(self) -> None:
        """An unlisted zone falls back to the first configured zone."""
        identity = InstanceIdentity(availability_zone="eu-west-1a")

        assert own_zone(ZONES, identity) == "us-east-1a"

    def test_no_identity_falls_back_to_first(self) -> None:
        """Without identity the first configured zone is used."""
        assert own_zone(ZONES, None) == "us-east-1a"

    def test_no_zones_uses_default(self) -> None:
        """Without configured zones the default designation is used."""
        identity = InstanceIdentity(availability_zone="us-east-1a")

        assert own_zone([], identity) == "default"
        assert own_zone([], identity, default="fallbackZone") == "fallbackZone"


class TestServiceUrlsByZone:
    """Tests for service_urls_by_zone."""

    def test_prefer_same_zone_starts_with_own_zone(self) -> None:
        """Own zone comes first, then the others round-robin."""
        urls = service_urls_by_zone(make_config(), "us-east-1b", True)

        assert list(urls) == ["us-east-1b", "us-east-1c", "us-east-1a"]
        assert urls["us-east-1a"] == ["http://a1:8080", "http://a2:8080"]

    def test_without_preference_starts_with_other_zone(self) -> None:
        """Without same-zone preference the first other zone leads."""
        urls = service_urls_by_zone(make_config(), "us-east-1a", False)

        assert list(urls) == ["us-east-1b", "us-east-1c", "us-east-1a"]

    def test_unknown_zone_defaults_to_first(self, caplog) -> None:
        """An unmatched zone starts from the first zone with a warning."""
        with caplog.at_level(logging.WARNING, logger="pyregistry"):
            urls = service_urls_by_zone(make_config(), "eu-west-1a", True)

        assert list(urls) == ZONES
        assert "Could not pick a zone" in caplog.text

    def test_zones_without_urls_skipped(self) -> None:
        """Zones with no URLs are left out of the mapping."""
        config = make_config(service_urls={"us-east-1c": ["http://c1:8080"]})

        urls = service_urls_by_zone(config, "us-east-1a", True)

        assert urls == {"us-east-1c": ["http://c1:8080"]}

    def test_no_zones_uses_default_zone(self) -> None:
        """Without zones for the region, the default zone's URLs are read."""
        config = ClientConfig(service_urls={"default": ["http://fallback:8080"]})

        urls = service_urls_by_zone(config, "default", True)

        assert urls == {"default": ["http://fallback:8080"]}

    def test_nothing_configured_is_empty(self, caplog) -> None:
        """No URLs anywhere gives an empty mapping, not an error."""
        with caplog.at_level(logging.WARNING, logger="pyregistry"):
            urls = service_urls_by_zone(ClientConfig(), "default", True)

        assert urls == {}
        assert "No service URLs configured" in caplog.text

    def test_deterministic(self) -> None:
        """Identical inputs give identical mappings."""
        config = make_config()

        assert service_urls_by_zone(config, "us-east-1c", True) == service_urls_by_zone(
            config, "us-east-1c", True
        )
