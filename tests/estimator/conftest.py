"""Shared helpers for HyperLogLog tests."""
from __future__ import annotations

from accesslens.analytics.hyperloglog import HyperLogLog


def fill(hll: HyperLogLog, prefix: str, start: int, stop: int) -> HyperLogLog:
    for i in range(start, stop):
        hll.add(f"{prefix}-{i}".encode("utf-8"))
    return hll
