"""Bounded integer parsing with an explicit result type.

parse_bounded() never raises. It returns either Parsed(value) or
ParseFailure(reason), and callers branch on the type:

    result = parse_bounded(token, 0, 23)
    if isinstance(result, Parsed):
        hours[result.value] += 1

Accepted syntax: optional sign, then ASCII decimal digits. No
whitespace, no underscores, no other bases.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

_DECIMAL = re.compile(r"[+-]?[0-9]+")


class FailureReason(Enum):
    NON_NUMERIC = auto()
    OUT_OF_RANGE = auto()


@dataclass(frozen=True, slots=True)
class Parsed:
    value: int


@dataclass(frozen=True, slots=True)
class ParseFailure:
    reason: FailureReason


ParseResult = Parsed | ParseFailure


def parse_bounded(text: str | None, low: int, high: int) -> ParseResult:
    """Parse `text` as an integer within [low, high] inclusive."""
    if text is None or not _DECIMAL.fullmatch(text):
        return ParseFailure(FailureReason.NON_NUMERIC)
    value = int(text)
    if value < low or value > high:
        return ParseFailure(FailureReason.OUT_OF_RANGE)
    return Parsed(value)


def bounded_or_none(text: str | None, low: int, high: int) -> int | None:
    """Shorthand for callers that treat every failure as "missing"."""
    result = parse_bounded(text, low, high)
    if isinstance(result, Parsed):
        return result.value
    return None
