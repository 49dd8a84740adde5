"""Results -- the finalized snapshot of one analysis run.

Built exactly once by Aggregator.finalize() and handed to the report
renderers. frozen=True plus tuple-typed histograms mean nothing
downstream can mutate it.

Histogram indices:
    status[code]         0..STATUS_CODE_MAX-1
    methods[i]           config.METHODS[i]
    protocols[i]         config.PROTOCOLS[i]
    hours[h]             0..23
    continents[i]        config.CONTINENTS[i]
    countries[id]        geolocation country id
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Results:
    file_name: str
    file_size: int
    timestamp: str                  # generation time, YYYY-MM-DD HH:MM:SS
    runtime: float                  # seconds of processor time

    processed_lines: int
    invalid_lines: int

    hits_ipv4: int
    hits_ipv6: int
    hits: int

    visits_ipv4: int
    visits_ipv6: int
    visits: int

    bandwidth: int

    status: tuple[int, ...]
    methods: tuple[int, ...]
    protocols: tuple[int, ...]
    hours: tuple[int, ...]
    continents: tuple[int, ...]
    countries: tuple[int, ...]

    @property
    def valid_ratio(self) -> float:
        """Share of processed lines that carried a valid address."""
        if self.processed_lines == 0:
            return 0.0
        return self.hits / self.processed_lines
