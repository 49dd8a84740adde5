"""Domain model for accesslens.

Re-exports all public types for convenient access:
    from accesslens.domain import LogRecord, ClassifiedLine, Results
"""
from accesslens.domain.records import (
    AddressFamily,
    ClassifiedLine,
    LogRecord,
    ParsedDate,
    ParsedRequest,
)
from accesslens.domain.results import Results
from accesslens.domain.types import ContinentCode, CountryId, Token

__all__ = [
    "AddressFamily",
    "ClassifiedLine",
    "LogRecord",
    "ParsedDate",
    "ParsedRequest",
    "Results",
    "ContinentCode",
    "CountryId",
    "Token",
]
