"""Turn a tokenized LogRecord into a ClassifiedLine.

The remote host decides validity: if it is not an IPv4 or IPv6
address the whole line is invalid and classify_line() returns None.
Every other field is classified on its own, and a field that is
missing or out of range becomes None without affecting the rest.
"""
from __future__ import annotations

import ipaddress

from accesslens.config import (
    CONTINENTS,
    METHODS,
    OBJECT_SIZE_MAX,
    PROTOCOLS,
    STATUS_CODE_MAX,
)
from accesslens.domain.records import AddressFamily, ClassifiedLine, LogRecord
from accesslens.geo.locator import GeoLocator
from accesslens.parsing.numbers import Parsed, bounded_or_none, parse_bounded
from accesslens.parsing.request import parse_request
from accesslens.parsing.timestamp import parse_date


def table_index(table: tuple[str, ...], value: str | None) -> int | None:
    """Position of the first entry equal to `value`, or None."""
    if value is None:
        return None
    for i, entry in enumerate(table):
        if entry == value:
            return i
    return None


def address_family(host: str | None) -> AddressFamily | None:
    """IPV4/IPV6 for a textual address, None for anything else."""
    if not host:
        return None
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return None
    if ip.version == 6 and ip.scope_id is not None:
        # inet_pton has no zone ids; fe80::1%eth0 is not a remote address
        return None
    return AddressFamily.IPV4 if ip.version == 4 else AddressFamily.IPV6


def classify_hour(date: str | None) -> int | None:
    result = parse_bounded(parse_date(date).hour, 0, 23)
    if isinstance(result, Parsed):
        return result.value
    return None


def classify_line(record: LogRecord, geo: GeoLocator) -> ClassifiedLine | None:
    """Classify one record. None means the line is invalid."""
    family = address_family(record.remote_host)
    if family is None:
        return None
    host = record.remote_host

    country_id = geo.lookup_country(host)
    continent = None
    if country_id is not None:
        continent = table_index(CONTINENTS, geo.continent_of(country_id))

    request = parse_request(record.request)

    return ClassifiedLine(
        family=family,
        remote_host=host,
        country_id=country_id,
        continent=continent,
        hour=classify_hour(record.date),
        method=table_index(METHODS, request.method),
        protocol=table_index(PROTOCOLS, request.protocol),
        status_code=bounded_or_none(record.status_code, 0, STATUS_CODE_MAX - 1),
        object_size=bounded_or_none(record.object_size, 0, OBJECT_SIZE_MAX),
    )
