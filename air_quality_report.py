#!/usr/bin/env python3
"""Print an air quality report or a one-off AQI calculation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from airwatch.data.openweather import ApiUsage, NasaClient, OpenWeatherClient
from airwatch.services.alerts import classify_standard
from airwatch.services.aqi import AQIError, to_aqi
from airwatch.services.breakpoints import SUPPORTED_POLLUTANTS
from airwatch.services.report import build_report
from airwatch.utils.cache import ResponseCache
from airwatch.utils.config import get_cache_ttl_seconds, get_request_timeout, load_api_keys
from airwatch.utils.logging import configure_logging

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report and forecast air quality for a location.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Print the JSON air quality report for a location.")
    report.add_argument("--lat", type=float, required=True, help="Latitude in decimal degrees.")
    report.add_argument("--lon", type=float, required=True, help="Longitude in decimal degrees.")
    report.add_argument("--city", help="City name used when demo data is shown.")
    report.add_argument("--country", help="Country code used when demo data is shown.")
    report.add_argument("--demo", action="store_true", help="Skip the upstream fetch and use demo data.")
    report.add_argument(
        "--history",
        action="store_true",
        help="Score the forecast against simulated 24 hour history instead of the quick fallback.",
    )

    calculate = subparsers.add_parser("calculate", help="Convert a pollutant concentration to the US AQI.")
    calculate.add_argument("pollutant", help=f"One of: {', '.join(SUPPORTED_POLLUTANTS)}.")
    calculate.add_argument("concentration", type=float, help="Concentration in the pollutant's table units.")
    return parser.parse_args(argv)


def run_report(args: argparse.Namespace) -> int:
    cache = ResponseCache(ttl_seconds=get_cache_ttl_seconds())
    client = None
    nasa = None
    if not args.demo:
        try:
            keys = load_api_keys()
        except RuntimeError as exc:
            LOGGER.warning("%s; using demo data", exc)
        else:
            usage = ApiUsage()
            timeout = get_request_timeout()
            client = OpenWeatherClient(keys.openweather, cache=cache, usage=usage, timeout=timeout)
            if keys.nasa:
                nasa = NasaClient(keys.nasa, usage=usage, timeout=timeout)

    report = build_report(
        args.lat,
        args.lon,
        cache,
        client=client,
        nasa=nasa,
        with_history=args.history,
        city=args.city,
        country=args.country,
    )
    json.dump(report, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


def run_calculate(args: argparse.Namespace) -> int:
    if args.concentration <= 0:
        print("Please enter a valid concentration value", file=sys.stderr)
        return 2
    try:
        aqi = to_aqi(args.pollutant, args.concentration)
    except AQIError as exc:
        print(f"AQI calculation unavailable: {exc}", file=sys.stderr)
        return 2
    category = classify_standard(aqi)
    print(f"AQI {aqi} ({category.label.upper()}): {category.advisory}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    if args.command == "report":
        return run_report(args)
    return run_calculate(args)


if __name__ == "__main__":
    sys.exit(main())
