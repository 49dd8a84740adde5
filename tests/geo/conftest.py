"""Shared CSV tables for geolocation tests."""
from __future__ import annotations

import pytest

V4_TABLE = """network,country_code,continent_code
# documentation ranges
192.0.2.0/24,FR,EU
198.51.100.0/24,BR,SA
203.0.113.128/25,FR,EU
"""

V6_TABLE = """2001:db8::/32,JP,AS
2001:db8:1::/48,AU,OC
"""


@pytest.fixture
def tables(tmp_path):
    v4 = tmp_path / "geo4.csv"
    v6 = tmp_path / "geo6.csv"
    v4.write_text(V4_TABLE, encoding="utf-8")
    v6.write_text(V6_TABLE, encoding="utf-8")
    return v4, v6
