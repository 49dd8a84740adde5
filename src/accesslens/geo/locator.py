"""Address -> country/continent lookup.

The analyzer only needs three questions answered: which country does
this address belong to, which continent is that country on, and what
is the country's display code. GeoLocator is that interface.

NullGeoLocator answers "unknown" to everything and is the normal mode
when no database is supplied. NetworkTableGeoLocator reads CIDR tables
exported as CSV:

    network,country_code,continent_code
    1.0.0.0/24,AU,OC
    2001:200::/32,JP,AS

Lookup keeps each family's networks sorted by first address and uses
bisect to find the last network starting at or below the query, then
checks the query falls inside it: O(log n) per address. Overlapping
networks are not supported; the later start wins.
"""
from __future__ import annotations

import bisect
import csv
import ipaddress
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from accesslens.domain.types import ContinentCode, CountryId

log = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "--"


class GeoDatabaseError(ValueError):
    """A geolocation table could not be parsed."""


@runtime_checkable
class GeoLocator(Protocol):
    @property
    def country_count(self) -> int: ...

    def lookup_country(self, address: str) -> CountryId | None: ...

    def continent_of(self, country_id: CountryId) -> ContinentCode | None: ...

    def country_code(self, country_id: CountryId) -> str: ...


class NullGeoLocator:
    """Locator used when no database is available. Everything is unknown."""

    @property
    def country_count(self) -> int:
        return 0

    def lookup_country(self, address: str) -> CountryId | None:
        return None

    def continent_of(self, country_id: CountryId) -> ContinentCode | None:
        return None

    def country_code(self, country_id: CountryId) -> str:
        return UNKNOWN_COUNTRY


@dataclass(slots=True)
class _RangeTable:
    """Sorted, non-overlapping [start, end] integer ranges for one family."""
    starts: list[int] = field(default_factory=list)
    ends: list[int] = field(default_factory=list)
    countries: list[CountryId] = field(default_factory=list)

    def insert(self, start: int, end: int, country_id: CountryId) -> None:
        pos = bisect.bisect_left(self.starts, start)
        if pos < len(self.starts) and self.starts[pos] == start:
            self.ends[pos] = end
            self.countries[pos] = country_id
            return
        self.starts.insert(pos, start)
        self.ends.insert(pos, end)
        self.countries.insert(pos, country_id)

    def find(self, value: int) -> CountryId | None:
        pos = bisect.bisect_right(self.starts, value) - 1
        if pos < 0 or value > self.ends[pos]:
            return None
        return self.countries[pos]

    def __len__(self) -> int:
        return len(self.starts)


class NetworkTableGeoLocator:
    """In-memory CIDR table locator, one range table per address family.

    Country ids are assigned in order of first appearance, so id i is
    valid for 0 <= i < country_count.
    """

    def __init__(self) -> None:
        self._v4 = _RangeTable()
        self._v6 = _RangeTable()
        self._codes: list[str] = []
        self._continents: list[ContinentCode | None] = []
        self._ids: dict[str, CountryId] = {}

    @classmethod
    def from_csv(
        cls,
        v4_path: str | Path | None = None,
        v6_path: str | Path | None = None,
    ) -> NetworkTableGeoLocator:
        """Load one or both CSV tables. Either path may be None."""
        locator = cls()
        for path in (v4_path, v6_path):
            if path is not None:
                locator.load_csv(path)
        return locator

    def load_csv(self, path: str | Path) -> int:
        """Load a CSV table, returning the number of networks added."""
        added = 0
        with open(path, newline="", encoding="utf-8") as fh:
            for lineno, row in enumerate(csv.reader(fh), start=1):
                if not row or row[0].startswith("#"):
                    continue
                if row[0].strip().lower() == "network":  # header
                    continue
                if len(row) < 3:
                    raise GeoDatabaseError(
                        f"{path}:{lineno}: expected network,country,continent"
                    )
                network, country, continent = (c.strip() for c in row[:3])
                try:
                    self.add_network(network, country, continent or None)
                except ValueError as exc:
                    raise GeoDatabaseError(f"{path}:{lineno}: {exc}") from exc
                added += 1
        log.info("Loaded %d networks from %s", added, path)
        return added

    def add_network(
        self,
        network: str,
        country: str,
        continent: ContinentCode | None,
    ) -> CountryId:
        """Register a CIDR network for a country. Returns the country id."""
        net = ipaddress.ip_network(network, strict=False)
        if not country:
            raise ValueError(f"empty country code for {network}")
        country_id = self._country_id(country, continent)
        table = self._v4 if net.version == 4 else self._v6
        table.insert(
            int(net.network_address), int(net.broadcast_address), country_id,
        )
        return country_id

    def _country_id(self, country: str, continent: ContinentCode | None) -> CountryId:
        country_id = self._ids.get(country)
        if country_id is None:
            country_id = len(self._codes)
            self._ids[country] = country_id
            self._codes.append(country)
            self._continents.append(continent)
        elif self._continents[country_id] is None and continent:
            self._continents[country_id] = continent
        return country_id

    @property
    def country_count(self) -> int:
        return len(self._codes)

    @property
    def network_count(self) -> int:
        return len(self._v4) + len(self._v6)

    def lookup_country(self, address: str) -> CountryId | None:
        try:
            ip = ipaddress.ip_address(address)
        except ValueError:
            return None
        table = self._v4 if ip.version == 4 else self._v6
        return table.find(int(ip))

    def continent_of(self, country_id: CountryId) -> ContinentCode | None:
        if 0 <= country_id < len(self._continents):
            return self._continents[country_id]
        return None

    def country_code(self, country_id: CountryId) -> str:
        if 0 <= country_id < len(self._codes):
            return self._codes[country_id]
        return UNKNOWN_COUNTRY
