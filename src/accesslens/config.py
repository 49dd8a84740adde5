"""Fixed classification tables and default tunables.

Every table here is an immutable tuple. Lookups scan in order and the
first match wins, so the order is part of the contract: a bucket's
index in Results is its position in the table below.
"""
from __future__ import annotations

from types import MappingProxyType

VERSION = "accesslens 0.1.0"

# fgets-style buffer size: the longest physical line kept, terminator included
LINE_MAX_LENGTH = 65536

# Status histogram covers 0..STATUS_CODE_MAX-1
STATUS_CODE_MAX = 512

# 2^14 registers per address family, ~0.81% standard error
HLL_PRECISION = 14

# Object sizes must fit a signed 64-bit counter
OBJECT_SIZE_MAX = (1 << 63) - 1

METHODS: tuple[str, ...] = (
    "GET",
    "POST",
    "HEAD",
    "PUT",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
    "PATCH",
)

PROTOCOLS: tuple[str, ...] = (
    "HTTP/1.0",
    "HTTP/1.1",
    "HTTP/2",
    "HTTP/3",
)

CONTINENTS: tuple[str, ...] = ("AF", "AN", "AS", "EU", "NA", "OC", "SA")

CONTINENT_NAMES = MappingProxyType({
    "AF": "Africa",
    "AN": "Antarctica",
    "AS": "Asia",
    "EU": "Europe",
    "NA": "North America",
    "OC": "Oceania",
    "SA": "South America",
})

HOURS = 24
