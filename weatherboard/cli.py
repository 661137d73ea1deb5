"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging
import sys

from weatherboard.config.loader import load_config
from weatherboard.config.schema import AppConfig
from weatherboard.ingest.geolocation import ConfiguredGeolocator
from weatherboard.ingest.location_fetcher import LocationFetcher
from weatherboard.ingest.openweather_client import OpenWeatherClient, ProviderError
from weatherboard.pipeline.dashboard import DashboardError, WeatherDashboard
from weatherboard.registry.location_registry import LocationRegistry
from weatherboard.reporting.console import ConsoleSink
from weatherboard.reporting.formatters import format_records_json, format_refresh_text
from weatherboard.storage.city_store import PersistenceError, SqliteCityStore
from weatherboard.storage.database import connect, run_migrations

DEFAULT_CONFIG = "configs/default.yaml"
DEFAULT_DB = "data/weatherboard.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherboard",
        description="Track current weather and a short forecast for your cities",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    show_p = sub.add_parser("show", help="Show tracked cities (no network)")
    show_p.add_argument("--json", action="store_true", help="Print records as JSON")

    add_p = sub.add_parser("add", help="Search a city and track it")
    add_p.add_argument("city", nargs="+", help="City name, e.g. 'London' or 'Paris,FR'")

    sub.add_parser("locate", help="Track the configured home location")

    remove_p = sub.add_parser("remove", help="Stop tracking a city")
    remove_p.add_argument("location_id", type=int, help="Location id shown on the card")

    sub.add_parser("refresh", help="Refresh all tracked cities")
    sub.add_parser("start", help="Load and refresh, or locate if nothing is tracked")

    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)

    conn = connect(args.db)
    run_migrations(conn)
    sink = ConsoleSink(horizon_days=config.dashboard.forecast_days)
    registry = LocationRegistry(
        SqliteCityStore(conn, key=config.dashboard.storage_key), sink
    )
    try:
        if args.command == "show":
            return _cmd_show(registry, sink, args)
        if args.command == "remove":
            registry.load()
            registry.remove(args.location_id)
            return 0
        return asyncio.run(_run_async(config, registry, sink, args))
    except (DashboardError, PersistenceError, ProviderError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        conn.close()


def _cmd_show(registry: LocationRegistry, sink: ConsoleSink, args) -> int:
    registry.load()
    if args.json:
        print(format_records_json(registry.records))
    else:
        sink.render(registry.records)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    print("Error: use 'config show'")
    return 1


async def _run_async(config: AppConfig, registry: LocationRegistry, sink: ConsoleSink, args) -> int:
    client = OpenWeatherClient(
        base_url=config.provider.base_url,
        units=config.provider.units.value,
        timeout=config.provider.timeout,
        max_retries=config.provider.max_retries,
        retry_base_delay=config.provider.retry_base_delay,
    )
    dashboard = WeatherDashboard(
        registry,
        LocationFetcher(client),
        ConfiguredGeolocator(config.dashboard.home),
        config.dashboard,
    )
    try:
        if args.command == "start":
            summary = await dashboard.start()
            if summary is not None:
                print(format_refresh_text(summary))
        elif args.command == "refresh":
            registry.load()
            print(format_refresh_text(await dashboard.refresh()))
        elif args.command == "add":
            registry.load()
            await dashboard.search_city(" ".join(args.city))
        elif args.command == "locate":
            registry.load()
            await dashboard.locate_me()
        if sink.render_count == 0:
            # nothing changed, show the stored state
            sink.render(registry.records)
        return 0
    finally:
        await client.aclose()
