"""accesslens CLI entry point.

Usage: uv run accesslens [options] inputfile

Use "-" as inputfile to read from standard input.
"""
import argparse
import logging
import sys

from accesslens.analytics.hyperloglog import MAX_PRECISION, MIN_PRECISION
from accesslens.config import HLL_PRECISION, LINE_MAX_LENGTH, VERSION
from accesslens.geo.locator import (
    GeoDatabaseError,
    GeoLocator,
    NetworkTableGeoLocator,
    NullGeoLocator,
)
from accesslens.pipeline import PassOptions, analyze_file
from accesslens.report import format_json, format_text

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="accesslens",
        description="Web access-log analyzer -- one pass, bounded memory.",
    )
    parser.add_argument(
        "input", nargs="?",
        help='Access log to analyze, or "-" for standard input.',
    )
    parser.add_argument(
        "-v", "--version", action="version", version=VERSION,
    )
    parser.add_argument(
        "--format", choices=("json", "text"), default="json",
        help="Report format (default: json)",
    )
    parser.add_argument(
        "--geoip", metavar="CSV",
        help="IPv4 network,country,continent table for geolocation.",
    )
    parser.add_argument(
        "--geoip6", metavar="CSV",
        help="IPv6 network,country,continent table for geolocation.",
    )
    parser.add_argument(
        "--precision", type=int, default=HLL_PRECISION,
        help=f"HyperLogLog precision, 4..20 (default: {HLL_PRECISION})",
    )
    parser.add_argument(
        "--max-line-length", type=int, default=LINE_MAX_LENGTH,
        help=f"Longest line kept, in bytes (default: {LINE_MAX_LENGTH})",
    )
    parser.add_argument(
        "--no-sandbox", action="store_true",
        help="Do not restrict file descriptors after opening the input.",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Log debug messages to stderr.",
    )
    return parser


def _load_geo(args: argparse.Namespace) -> GeoLocator:
    if not (args.geoip or args.geoip6):
        return NullGeoLocator()
    try:
        return NetworkTableGeoLocator.from_csv(args.geoip, args.geoip6)
    except OSError as exc:
        # a missing database is a supported mode, not a failure
        log.warning("Geolocation disabled: %s", exc)
        return NullGeoLocator()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.input is None:
        parser.print_help()
        sys.exit(0)

    if not MIN_PRECISION <= args.precision <= MAX_PRECISION:
        parser.error(
            f"--precision must be {MIN_PRECISION}..{MAX_PRECISION}, "
            f"got {args.precision}"
        )
    if args.max_line_length < 2:
        parser.error("--max-line-length must be at least 2")

    try:
        geo = _load_geo(args)
    except GeoDatabaseError as exc:
        print(f"Invalid geolocation table: {exc}", file=sys.stderr)
        sys.exit(1)

    options = PassOptions(
        precision=args.precision,
        max_line_length=args.max_line_length,
        sandbox=not args.no_sandbox,
        geo=geo,
    )
    try:
        results = analyze_file(args.input, options)
    except OSError as exc:
        print(f"Can't open log file: {exc}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Processed {results.processed_lines} lines in {results.runtime:f} seconds",
        file=sys.stderr,
    )
    render = format_text if args.format == "text" else format_json
    sys.stdout.write(render(results, geo))
