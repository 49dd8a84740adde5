"""Date-field sub-parser for `day/Mon/Year:HH:MM:SS zone`.

Only the layout is checked here. The components come back as raw text
and hour range validation happens during classification, so a
well-shaped but impossible hour ("25") still parses.
"""
from __future__ import annotations

import re

from accesslens.domain.records import ParsedDate

_LAYOUT = re.compile(
    r"(?P<day>[^/\s]+)/(?P<month>[^/\s]+)/(?P<year>[^:\s]+)"
    r":(?P<hour>[^:\s]+):(?P<minute>[^:\s]+):(?P<second>[^:\s]+)"
    r"(?:\s+(?P<zone>\S+))?\s*"
)


def parse_date(date: str | None) -> ParsedDate:
    """Split a bracketed date token. Any layout deviation gives all-None."""
    if date is None:
        return ParsedDate()
    match = _LAYOUT.fullmatch(date)
    if match is None:
        return ParsedDate()
    return ParsedDate(**match.groupdict())
