"""Access-log line tokenizer.

Splits one raw line into the positional fields of the common/combined
log format:

    host ident authuser [date] "request" status bytes "referrer" "agent"

The scan tracks two modes. "[" enters bracket mode until the next "]",
and '"' enters quote mode until the next '"'. Whitespace separates
fields only when neither mode is active. Delimiters are stripped and
the span between them is captured whole, spaces included.

Never raises. An unterminated bracket or quote runs to end of line,
and a short line just leaves its trailing fields as None.
"""
from __future__ import annotations

from accesslens.domain.records import LogRecord

_WHITESPACE = frozenset(" \t\r\n\v\f")

_OUTSIDE = 0
_IN_BRACKETS = 1
_IN_QUOTES = 2


def split_fields(line: str) -> list[str]:
    """Split a line into raw field tokens, honouring [..] and ".." spans."""
    tokens: list[str] = []
    current: list[str] | None = None
    mode = _OUTSIDE

    for ch in line:
        if mode == _IN_QUOTES:
            if ch == '"':
                mode = _OUTSIDE
            else:
                current.append(ch)
        elif mode == _IN_BRACKETS:
            if ch == "]":
                mode = _OUTSIDE
            else:
                current.append(ch)
        elif ch in _WHITESPACE:
            if current is not None:
                tokens.append("".join(current))
                current = None
        else:
            # any other character starts a token if none is open
            if current is None:
                current = []
            if ch == '"':
                mode = _IN_QUOTES
            elif ch == "[":
                mode = _IN_BRACKETS
            else:
                current.append(ch)

    if current is not None:
        tokens.append("".join(current))
    return tokens


def tokenize(line: str) -> LogRecord:
    """Tokenize one line into a LogRecord. Extra trailing fields are dropped."""
    return LogRecord.from_tokens(split_fields(line))
