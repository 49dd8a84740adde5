"""Shared fixtures for classification and aggregation tests."""
from __future__ import annotations

import pytest

from accesslens.geo.locator import NetworkTableGeoLocator

SAMPLE_LINE = (
    '192.0.2.1 - - [10/Oct/2023:13:55:36 -0700] '
    '"GET /index.html HTTP/1.1" 200 1024'
)


def make_line(
    host: str = "192.0.2.1",
    date: str = "10/Oct/2023:13:55:36 -0700",
    request: str = "GET /index.html HTTP/1.1",
    status: str = "200",
    size: str = "1024",
) -> str:
    return f'{host} - - [{date}] "{request}" {status} {size}\n'


@pytest.fixture
def geo() -> NetworkTableGeoLocator:
    """192.0.2.0/24 -> FR/EU (id 0), 2001:db8::/32 -> JP/AS (id 1),
    203.0.113.0/24 -> XX with no continent (id 2)."""
    locator = NetworkTableGeoLocator()
    locator.add_network("192.0.2.0/24", "FR", "EU")
    locator.add_network("2001:db8::/32", "JP", "AS")
    locator.add_network("203.0.113.0/24", "XX", None)
    return locator
