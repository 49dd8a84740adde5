"""Per-line records produced by the parsers.

All of these are ephemeral: built for one line, consumed by the
classifier, then dropped. A field set to None was absent or could not
be split out. An empty string is a present (if useless) value.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from accesslens.domain.types import CountryId, Token


@dataclass(frozen=True, slots=True)
class LogRecord:
    """One access-log line split into the combined log format fields."""
    remote_host: Token = None
    identity: Token = None
    auth_user: Token = None
    date: Token = None              # bracket content, e.g. 10/Oct/2023:13:55:36 -0700
    request: Token = None           # quote content, e.g. GET / HTTP/1.1
    status_code: Token = None
    object_size: Token = None
    referrer: Token = None
    user_agent: Token = None

    FIELD_ORDER = (
        "remote_host", "identity", "auth_user", "date", "request",
        "status_code", "object_size", "referrer", "user_agent",
    )

    @classmethod
    def from_tokens(cls, tokens: list[str]) -> LogRecord:
        """Assign tokens positionally. Missing trailing fields stay None."""
        return cls(**dict(zip(cls.FIELD_ORDER, tokens)))


@dataclass(frozen=True, slots=True)
class ParsedRequest:
    method: Token = None
    resource: Token = None
    protocol: Token = None


@dataclass(frozen=True, slots=True)
class ParsedDate:
    """Components of `day/Mon/Year:HH:MM:SS zone`, still as raw text.

    Only `hour` feeds the aggregate; numeric validation is the caller's job.
    """
    day: Token = None
    month: Token = None
    year: Token = None
    hour: Token = None
    minute: Token = None
    second: Token = None
    zone: Token = None


class AddressFamily(Enum):
    IPV4 = auto()
    IPV6 = auto()


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """Everything the aggregator needs from one address-valid line.

    Indices point into the tables in accesslens.config. None means the
    field was missing or failed validation and no bucket is touched.
    """
    family: AddressFamily
    remote_host: str
    country_id: CountryId | None = None
    continent: int | None = None
    hour: int | None = None
    method: int | None = None
    protocol: int | None = None
    status_code: int | None = None
    object_size: int | None = None
