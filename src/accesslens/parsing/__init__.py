"""Line and field parsers.

Public API:
    tokenize: raw line -> LogRecord
    parse_request: request field -> ParsedRequest
    parse_date: date field -> ParsedDate
    parse_bounded: text -> Parsed | ParseFailure
"""

from accesslens.parsing.numbers import (
    FailureReason,
    ParseFailure,
    Parsed,
    bounded_or_none,
    parse_bounded,
)
from accesslens.parsing.request import parse_request
from accesslens.parsing.timestamp import parse_date
from accesslens.parsing.tokenizer import split_fields, tokenize

__all__ = [
    "FailureReason",
    "ParseFailure",
    "Parsed",
    "bounded_or_none",
    "parse_bounded",
    "parse_date",
    "parse_request",
    "split_fields",
    "tokenize",
]
