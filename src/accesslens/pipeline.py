"""Single-pass driver: input stream -> Aggregator -> Results.

Lines flow one at a time through tokenize -> classify -> update. No
records are buffered, so memory stays flat however large the input
is. The only blocking point is the read of the next line. A slow pipe
on stdin simply makes the pass take longer.

Input is read as bytes and decoded as latin-1, which maps every byte
to exactly one character. Logs that are not valid UTF-8 therefore
never raise, and ASCII fields (addresses, methods, status codes) come
through unchanged.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO

from accesslens.analytics.aggregator import Aggregator
from accesslens.config import HLL_PRECISION, LINE_MAX_LENGTH
from accesslens.domain.results import Results
from accesslens.geo.locator import GeoLocator, NullGeoLocator
from accesslens.sandbox import restrict_process

log = logging.getLogger(__name__)

STDIN_SENTINEL = "-"


@dataclass(slots=True)
class PassOptions:
    """Knobs for one analysis pass."""
    precision: int = HLL_PRECISION
    max_line_length: int = LINE_MAX_LENGTH
    sandbox: bool = False  # process-wide; the CLI opts in
    geo: GeoLocator = field(default_factory=NullGeoLocator)


def open_input(path: str) -> BinaryIO:
    """Open `path` for binary reading; "-" means standard input.

    Raises OSError if the file cannot be opened.
    """
    if path == STDIN_SENTINEL:
        return sys.stdin.buffer
    return open(path, "rb")


def input_size(path: str) -> int:
    """Size of the input in bytes, 0 for stdin or anything unstat-able."""
    if path == STDIN_SENTINEL:
        return 0
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def read_lines(stream: BinaryIO, max_line_length: int = LINE_MAX_LENGTH) -> Iterator[str]:
    """Yield decoded lines, truncating any longer than max_line_length - 1 bytes.

    The rest of an over-long physical line is read and thrown away so
    it cannot show up as a line of its own.
    """
    if max_line_length < 2:
        raise ValueError(f"max_line_length must be >= 2, got {max_line_length}")
    limit = max_line_length - 1
    while True:
        raw = stream.readline(limit)
        if not raw:
            return
        if len(raw) == limit and not raw.endswith(b"\n"):
            log.debug("Truncating line longer than %d bytes", limit)
            while True:
                rest = stream.readline(limit)
                if not rest or rest.endswith(b"\n"):
                    break
        yield raw.decode("latin-1")


def run_pass(
    lines: Iterable[str],
    geo: GeoLocator | None = None,
    precision: int = HLL_PRECISION,
) -> Aggregator:
    """Fold every line into a fresh Aggregator and return it unfinalized."""
    if geo is None:
        geo = NullGeoLocator()
    aggregator = Aggregator(precision=precision, country_count=geo.country_count)
    for line in lines:
        aggregator.process_line(line, geo)
    return aggregator


def analyze_file(path: str, options: PassOptions | None = None) -> Results:
    """Run the whole pass over a file (or stdin) and return the Results.

    Open and read failures propagate as OSError. Nothing partial is
    returned.
    """
    options = options or PassOptions()
    stream = open_input(path)
    try:
        if options.sandbox:
            restrict_process()
        begin = time.process_time()
        aggregator = run_pass(
            read_lines(stream, options.max_line_length),
            geo=options.geo,
            precision=options.precision,
        )
        runtime = time.process_time() - begin
    finally:
        if stream is not sys.stdin.buffer:
            stream.close()

    return aggregator.finalize(
        file_name=path,
        file_size=input_size(path),
        runtime=runtime,
    )
