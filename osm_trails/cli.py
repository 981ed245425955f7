"""Command-line interface for OSM Trails."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from pathlib import Path

import lxml.etree as etree
import requests
from dotenv import load_dotenv

from osm_trails.clients.osm import OsmGateway
from osm_trails.config import Config
from osm_trails.errors import OsmApiError
from osm_trails.models import Credentials
from osm_trails.services import (
    add_way,
    save_complete_way,
    traces_to_frame,
    update_trace_metadata,
    upload_trace_file,
)
from osm_trails.utils import setup_logging


def _handle_interrupt(_sig: int, _frame: object) -> None:
    """Handle Ctrl+C - exit immediately."""

    print("\n\nInterrupted by user. Exiting...")
    sys.exit(130)


def _point(value: str) -> tuple[float, float]:
    """Parse a "lat,lon" argument."""

    try:
        lat, lon = value.split(",")
        return float(lat), float(lon)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON, got {value!r}") from e


def _tag(value: str) -> tuple[str, str]:
    """Parse a "key=value" argument."""

    key, sep, tag_value = value.partition("=")

    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {value!r}")

    return key, tag_value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        description="Edit OpenStreetMap ways and manage GPS traces"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log HTTP requests",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("whoami", help="Show the authenticated user id")
    commands.add_parser("traces", help="List your GPS traces")

    upload = commands.add_parser("upload", help="Upload a GPS file as a private trace")
    upload.add_argument("file", type=Path)

    update = commands.add_parser("update-trace", help="Change a trace's metadata")
    update.add_argument("trace_id")
    update.add_argument("--name")
    update.add_argument("--description")
    update.add_argument("--visibility", choices=["private", "public", "trackable", "identifiable"])

    delete = commands.add_parser("delete-trace", help="Delete a trace")
    delete.add_argument("trace_id")

    way = commands.add_parser("way", help="Download a way with its nodes as GeoJSON")
    way.add_argument("way_id")
    way.add_argument("--output", type=Path, help="Output file (default: <output_dir>/way_<id>.geojson)")

    new_way = commands.add_parser("add-way", help="Create a way through the given points")
    new_way.add_argument("points", nargs="+", type=_point, metavar="LAT,LON")
    new_way.add_argument("--comment", required=True, help="Changeset comment")
    new_way.add_argument("--tag", action="append", type=_tag, default=[], metavar="KEY=VALUE")

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Main application logic. Returns the process exit status."""

    # Setup
    load_dotenv()
    config = Config.from_env()
    logger = setup_logging(config, logging.DEBUG if args.verbose else logging.INFO)

    credentials = Credentials(
        token=os.environ.get("OSM_TOKEN", ""),
        token_secret=os.environ.get("OSM_TOKEN_SECRET", ""),
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
    )
    gateway = OsmGateway(config, credentials, logger)

    try:
        if args.command == "whoami":
            user_id = gateway.get_user_id()

            if not user_id:
                logger.error("Not logged in (check OSM_TOKEN and OSM_TOKEN_SECRET)")
                return 1

            logger.info(f"User id: {user_id}")

        elif args.command == "traces":
            traces = gateway.get_traces()

            if not traces:
                logger.info("No traces")
            else:
                logger.info(traces_to_frame(traces).to_string(index=False))

        elif args.command == "upload":
            upload_trace_file(gateway, args.file)

        elif args.command == "update-trace":
            trace = update_trace_metadata(
                gateway,
                args.trace_id,
                name=args.name,
                description=args.description,
                visibility=args.visibility,
            )
            logger.info(f"Updated trace {trace.id}: {trace.name} ({trace.visibility})")

        elif args.command == "delete-trace":
            gateway.delete_trace(args.trace_id)

        elif args.command == "way":
            config.ensure_dirs()
            out_path = args.output or config.output_dir / f"way_{args.way_id}.geojson"

            if not save_complete_way(gateway, args.way_id, out_path, logger):
                return 1

            logger.info(f"Saved {out_path}")

        elif args.command == "add-way":
            way_id = add_way(gateway, args.comment, args.points, dict(args.tag), logger)
            logger.info(f"New way: {config.osm_base_address}/way/{way_id}")

    except requests.RequestException as e:
        logger.error(f"Network error: {e}")
        return 1
    except etree.LxmlError as e:
        logger.error(f"Invalid response from OSM: {e}")
        return 1
    except (OsmApiError, ValueError, OSError) as e:
        logger.error(f"Failed: {e}")
        return 1

    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for CLI."""

    signal.signal(signal.SIGINT, _handle_interrupt)
    args = parse_args(argv)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
