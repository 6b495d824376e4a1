"""Shared fixtures for resolver tests."""

from __future__ import annotations

import os

import pytest

from pyregistry.exceptions import DnsLookupError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Keep PYREGISTRY_ variables from the environment out of tests."""
    for key in list(os.environ):
        if key.startswith("PYREGISTRY_"):
            monkeypatch.delenv(key)


class FakeTxtQuery:
    """TXT query answering from a fixed table of records."""

    def __init__(self, records: dict[str, list[str]]):
        self.records = records
        self.queried: list[str] = []

    def __call__(self, name: str) -> list[str]:
        self.queried.append(name)
        if name not in self.records:
            raise DnsLookupError("NXDOMAIN", dns_name=name)
        return list(self.records[name])


@pytest.fixture
def txt_records() -> FakeTxtQuery:
    """Two-level TXT layout for the us-east-1 registry cluster."""
    return FakeTxtQuery(
        {
            "txt.us-east-1.registry.example.com": [
                "us-east-1a.registry.example.com",
                "us-east-1b.registry.example.com",
            ],
            "txt.us-east-1a.registry.example.com": ["node1.example.com", "node2.example.com"],
            "txt.us-east-1b.registry.example.com": ["node3.example.com"],
        }
    )


@pytest.fixture(autouse=True)
def reset_logging_levels():
    """Undo logger levels set by configure_logging in a test."""
    import logging

    from pyregistry.logging import logger, resolver_logger

    yield
    logger.setLevel(logging.NOTSET)
    resolver_logger.setLevel(logging.NOTSET)
