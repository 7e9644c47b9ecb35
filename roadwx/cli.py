"""CLI entry point for roadwx."""

import argparse
import logging
import sys

from roadwx.config.loader import get_config_value, load_config, set_config_value
from roadwx.config.schema import MAX_OUTLOOK_HOURS, RoadwxConfig
from roadwx.ingest.errors import RoadwxError
from roadwx.ingest.http_client import HttpClient
from roadwx.models.common import UnitSystem
from roadwx.pipeline.snapshot_pipeline import SnapshotPipeline
from roadwx.reporting.formatters import (
    format_cache_entries,
    format_snapshot_json,
    format_snapshot_text,
)
from roadwx.storage.kv_store import SqliteStore
from roadwx.storage.snapshot_cache import SnapshotCache

DEFAULT_CONFIG = "roadwx.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="roadwx",
        description="Weather, air quality and road conditions for a place",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("--db", default=None, help="SQLite cache path (overrides config)")
    parser.add_argument(
        "--no-cache", action="store_true", help="Skip the persistent snapshot cache"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Forecast for a ZIP, 'City, ST' or place")
    forecast_p.add_argument("query", help='e.g. 80202, "Denver, CO", Berlin')
    _add_output_args(forecast_p)

    # coords
    coords_p = sub.add_parser("coords", help="Forecast for latitude/longitude")
    coords_p.add_argument("lat", type=float)
    coords_p.add_argument("lon", type=float)
    coords_p.add_argument("--label", default=None, help="Display label (skips reverse lookup)")
    _add_output_args(coords_p)

    # cache show / cache clear
    cache_p = sub.add_parser("cache", help="Snapshot cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("show", help="List live cache entries")
    cache_sub.add_parser("clear", help="Remove all cache entries")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db is not None:
        config = set_config_value(config, "cache.db_path", args.db)

    try:
        if args.command in ("forecast", "coords"):
            return _cmd_snapshot(config, args)
        elif args.command == "cache":
            return _cmd_cache(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
    except RoadwxError as e:
        print(str(e), file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def _add_output_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--units", choices=[u.value for u in UnitSystem], default=None,
        help="Unit system for display (default from config)",
    )
    p.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    p.add_argument(
        "--hours", type=_outlook_hours, default=None,
        help=f"Hours of road outlook (1-{MAX_OUTLOOK_HOURS})",
    )


def _outlook_hours(value: str) -> int:
    try:
        hours = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if not 1 <= hours <= MAX_OUTLOOK_HOURS:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_OUTLOOK_HOURS}")
    return hours


def _cmd_snapshot(config: RoadwxConfig, args) -> int:
    units = UnitSystem(args.units) if args.units else config.display.unit_system
    hours = args.hours if args.hours is not None else config.display.outlook_hours

    with HttpClient(
        user_agent=config.http.user_agent, timeout=config.http.timeout_seconds
    ) as http:
        pipeline = SnapshotPipeline.from_config(config, http, use_cache=not args.no_cache)
        try:
            if args.command == "forecast":
                if not args.query.strip():
                    print("Please enter a location.", file=sys.stderr)
                    return 1
                snapshot = pipeline.for_query(args.query)
            else:
                snapshot = pipeline.for_coords(args.lat, args.lon, label=args.label)
        finally:
            pipeline.close()

    if args.json:
        print(format_snapshot_json(snapshot, hours))
    else:
        print(format_snapshot_text(snapshot, units, hours))
    return 0


def _cmd_cache(config: RoadwxConfig, args) -> int:
    store = SqliteStore(config.cache.db_path)
    cache = SnapshotCache(
        store,
        ttl_seconds=config.cache.ttl_minutes * 60,
        capacity=config.cache.capacity,
        storage_key=config.cache.storage_key,
    )
    try:
        if args.cache_command == "show":
            print(format_cache_entries(cache.entries()))
            return 0
        elif args.cache_command == "clear":
            cache.clear()
            print("Cache cleared")
            return 0
        print("Use: cache show | cache clear")
        return 1
    finally:
        store.close()


def _cmd_config(config: RoadwxConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


if __name__ == "__main__":
    sys.exit(main())
