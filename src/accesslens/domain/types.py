"""Shared type aliases used across the domain."""
from __future__ import annotations

from typing import TypeAlias

CountryId: TypeAlias = int       # index into the geolocation country table
ContinentCode: TypeAlias = str   # two-letter code, e.g. "EU"
Token: TypeAlias = str | None    # None marks a field absent from the line
