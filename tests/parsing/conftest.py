"""Shared sample lines for parser tests."""
from __future__ import annotations

COMMON_LINE = (
    '192.0.2.1 - - [10/Oct/2023:13:55:36 -0700] '
    '"GET /index.html HTTP/1.1" 200 1024'
)

COMBINED_LINE = (
    '2001:db8::1 - frank [10/Oct/2023:07:01:02 +0000] '
    '"POST /api/v1/items?id=3 HTTP/2" 201 512 '
    '"https://example.com/start" "Mozilla/5.0 (X11; Linux x86_64)"'
)
