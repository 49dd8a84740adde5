"""Report generation for a finalized Results snapshot.

Two renderings of the same data: JSON for machines and an aligned
text table for terminals. Both read only the Results (plus the
geolocation locator for country codes) and never see per-line state.
Histogram buckets with zero hits are left out.
"""
from __future__ import annotations

import json
from typing import Any

from accesslens.config import CONTINENT_NAMES, CONTINENTS, METHODS, PROTOCOLS, VERSION
from accesslens.domain.results import Results
from accesslens.geo.locator import GeoLocator, NullGeoLocator


def _named_buckets(
    counts: tuple[int, ...],
    labels: tuple[str, ...],
    names: dict[str, str] | None = None,
) -> list[dict[str, Any]]:
    out = []
    for label, hits in zip(labels, counts):
        if hits:
            entry: dict[str, Any] = {"data": label, "hits": hits}
            if names is not None:
                entry["name"] = names.get(label, label)
            out.append(entry)
    return out


def _indexed_buckets(counts: tuple[int, ...]) -> list[dict[str, Any]]:
    return [{"data": i, "hits": hits} for i, hits in enumerate(counts) if hits]


def results_to_dict(results: Results, geo: GeoLocator | None = None) -> dict[str, Any]:
    """Flatten Results into a JSON-serializable mapping."""
    geo = geo if geo is not None else NullGeoLocator()
    countries = [
        {"data": geo.country_code(cid), "hits": hits}
        for cid, hits in enumerate(results.countries)
        if hits
    ]
    return {
        "date": results.timestamp,
        "generator": VERSION,
        "file_name": results.file_name,
        "file_size": results.file_size,
        "processed_lines": results.processed_lines,
        "invalid_lines": results.invalid_lines,
        "bandwidth": results.bandwidth,
        "runtime": results.runtime,
        "hits": {
            "ipv4": results.hits_ipv4,
            "ipv6": results.hits_ipv6,
            "total": results.hits,
        },
        "visits": {
            "ipv4": results.visits_ipv4,
            "ipv6": results.visits_ipv6,
            "total": results.visits,
        },
        "continents": _named_buckets(results.continents, CONTINENTS, dict(CONTINENT_NAMES)),
        "countries": countries,
        "hours": _indexed_buckets(results.hours),
        "status": _indexed_buckets(results.status),
        "methods": _named_buckets(results.methods, METHODS),
        "protocols": _named_buckets(results.protocols, PROTOCOLS),
    }


def format_json(results: Results, geo: GeoLocator | None = None) -> str:
    return json.dumps(results_to_dict(results, geo), indent=2) + "\n"


def format_text(results: Results, geo: GeoLocator | None = None) -> str:
    """Format Results as a readable report string."""
    data = results_to_dict(results, geo)
    lines = [
        f"=== {results.file_name or '<stdin>'} ===",
        f"Generated:         {results.timestamp} by {VERSION}",
        f"File size:         {results.file_size:,} bytes",
        f"Processed lines:   {results.processed_lines:,}",
        f"Invalid lines:     {results.invalid_lines:,}",
        f"Bandwidth:         {results.bandwidth:,} bytes",
        f"Runtime:           {results.runtime:.3f} s",
        f"",
        f"{'':<18} {'IPv4':>12} {'IPv6':>12} {'Total':>12}",
        f"{'Hits':<18} {results.hits_ipv4:>12,} {results.hits_ipv6:>12,} "
        f"{results.hits:>12,}",
        f"{'Unique visitors':<18} {results.visits_ipv4:>12,} "
        f"{results.visits_ipv6:>12,} {results.visits:>12,}",
    ]

    sections = (
        ("Continents", "continents"),
        ("Countries", "countries"),
        ("Hours", "hours"),
        ("Status codes", "status"),
        ("Methods", "methods"),
        ("Protocols", "protocols"),
    )
    for title, key in sections:
        buckets = data[key]
        if not buckets:
            continue
        lines.append("")
        lines.append(f"{title}:")
        for bucket in buckets:
            label = bucket.get("name", bucket["data"])
            lines.append(f"  {str(label):<16} {bucket['hits']:>12,}")
    return "\n".join(lines) + "\n"
