"""Streaming analytics over classified access-log lines.

Public API:
    HyperLogLog: cardinality estimation (2^p bytes per counter)
    Aggregator: owns all histograms and both per-family estimators
    classify_line: LogRecord -> ClassifiedLine | None
"""

from accesslens.analytics.aggregator import AlreadyFinalized, Aggregator
from accesslens.analytics.classify import classify_line
from accesslens.analytics.hyperloglog import HyperLogLog

__all__ = [
    "Aggregator",
    "AlreadyFinalized",
    "HyperLogLog",
    "classify_line",
]
