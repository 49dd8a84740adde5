"""Request-line sub-parser: `METHOD resource PROTOCOL`."""
from __future__ import annotations

from accesslens.domain.records import ParsedRequest


def parse_request(request: str | None) -> ParsedRequest:
    """Split a request field into method, resource and protocol.

    Parts beyond the third are ignored; parts that are not there stay
    None. A missing request gives an all-None ParsedRequest.
    """
    if request is None:
        return ParsedRequest()
    parts = request.split(None, 3)[:3]
    return ParsedRequest(*parts)
