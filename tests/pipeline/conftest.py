"""Shared helpers for driver, report and CLI tests."""
from __future__ import annotations

import pytest

LOG_LINES = [
    '192.0.2.1 - - [10/Oct/2023:13:55:36 -0700] "GET /index.html HTTP/1.1" 200 1024',
    '192.0.2.2 - - [10/Oct/2023:14:01:00 -0700] "POST /form HTTP/1.1" 302 0',
    '2001:db8::1 - - [10/Oct/2023:14:02:00 -0700] "GET / HTTP/2" 200 2048',
    'garbage line that is not a log entry',
    '192.0.2.1 - - [10/Oct/2023:23:10:00 -0700] "HEAD / HTTP/1.0" 404 -',
]


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "access.log"
    path.write_bytes(("\n".join(LOG_LINES) + "\n").encode("ascii"))
    return path


@pytest.fixture
def geo_table(tmp_path):
    path = tmp_path / "geo4.csv"
    path.write_text("192.0.2.0/24,FR,EU\n", encoding="utf-8")
    return path
