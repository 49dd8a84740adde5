"""Aggregator: folds classified lines into fixed-size histograms.

Owns every counter of a run plus two HyperLogLog estimators, one per
address family. Lifecycle:

    agg = Aggregator(precision=14, country_count=geo.country_count)
    for line in lines:
        agg.process_line(line, geo)     # or update() / record_invalid()
    results = agg.finalize(file_name, file_size, runtime)

finalize() computes the derived totals, pulls the estimates out of
both HyperLogLogs and releases their registers. After that the
aggregator refuses further use, and the returned Results is immutable.
"""
from __future__ import annotations

import array
import time

from accesslens.analytics.classify import classify_line
from accesslens.analytics.hyperloglog import HyperLogLog
from accesslens.config import (
    CONTINENTS,
    HLL_PRECISION,
    HOURS,
    METHODS,
    PROTOCOLS,
    STATUS_CODE_MAX,
)
from accesslens.domain.records import AddressFamily, ClassifiedLine
from accesslens.domain.results import Results
from accesslens.geo.locator import GeoLocator
from accesslens.parsing.tokenizer import tokenize


class AlreadyFinalized(RuntimeError):
    """Raised when an aggregator is used after finalize()."""


def _counters(size: int) -> array.array:
    return array.array("Q", bytes(8 * size))


class Aggregator:
    """Per-run counters and estimators.

    Parameters:
        precision: HyperLogLog precision for both address families.
        country_count: Size of the country histogram, normally the
            geolocation locator's country_count. Ids outside it are ignored.
    """

    def __init__(
        self,
        precision: int = HLL_PRECISION,
        country_count: int = 0,
    ) -> None:
        self._unique_v4 = HyperLogLog(p=precision)
        self._unique_v6 = HyperLogLog(p=precision)

        self._hits_v4 = 0
        self._hits_v6 = 0
        self._invalid_lines = 0
        self._bandwidth = 0  # python int, cannot overflow

        self._status = _counters(STATUS_CODE_MAX)
        self._methods = _counters(len(METHODS))
        self._protocols = _counters(len(PROTOCOLS))
        self._hours = _counters(HOURS)
        self._continents = _counters(len(CONTINENTS))
        self._countries = _counters(country_count)

        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise AlreadyFinalized("Aggregator has already been finalized")

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def lines_seen(self) -> int:
        return self._hits_v4 + self._hits_v6 + self._invalid_lines

    def record_invalid(self) -> None:
        """Count a line whose remote host is not a valid address."""
        self._check_open()
        self._invalid_lines += 1

    def update(self, line: ClassifiedLine) -> None:
        """Fold one address-valid line into the counters.

        Only fields that are present and in range touch a bucket.
        """
        self._check_open()
        element = line.remote_host.encode("latin-1", "replace")
        if line.family is AddressFamily.IPV4:
            self._hits_v4 += 1
            self._unique_v4.add(element)
        else:
            self._hits_v6 += 1
            self._unique_v6.add(element)

        # a continent is only counted alongside its country
        if line.country_id is not None and 0 <= line.country_id < len(self._countries):
            self._countries[line.country_id] += 1
            if line.continent is not None:
                self._continents[line.continent] += 1
        if line.hour is not None:
            self._hours[line.hour] += 1
        if line.method is not None:
            self._methods[line.method] += 1
        if line.protocol is not None:
            self._protocols[line.protocol] += 1
        if line.status_code is not None:
            self._status[line.status_code] += 1
        if line.object_size is not None:
            self._bandwidth += line.object_size

    def process_line(self, line: str, geo: GeoLocator) -> ClassifiedLine | None:
        """Tokenize, classify and fold one raw line.

        Returns the classification, or None when the line was counted
        as invalid.
        """
        classified = classify_line(tokenize(line), geo)
        if classified is None:
            self.record_invalid()
        else:
            self.update(classified)
        return classified

    def finalize(
        self,
        file_name: str = "",
        file_size: int = 0,
        runtime: float = 0.0,
    ) -> Results:
        """Compute totals and freeze the run into a Results snapshot."""
        self._check_open()
        self._finalized = True

        hits = self._hits_v4 + self._hits_v6
        visits_v4 = self._unique_v4.count()
        visits_v6 = self._unique_v6.count()
        self._unique_v4.destroy()
        self._unique_v6.destroy()

        return Results(
            file_name=file_name,
            file_size=file_size,
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
            runtime=runtime,
            processed_lines=hits + self._invalid_lines,
            invalid_lines=self._invalid_lines,
            hits_ipv4=self._hits_v4,
            hits_ipv6=self._hits_v6,
            hits=hits,
            visits_ipv4=visits_v4,
            visits_ipv6=visits_v6,
            visits=visits_v4 + visits_v6,
            bandwidth=self._bandwidth,
            status=tuple(self._status),
            methods=tuple(self._methods),
            protocols=tuple(self._protocols),
            hours=tuple(self._hours),
            continents=tuple(self._continents),
            countries=tuple(self._countries),
        )
