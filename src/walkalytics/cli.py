"""
Command-line interface for the walkalytics client.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import requests

from walkalytics import __version__
from walkalytics.config import get_settings
from walkalytics.datasources.isochrone import (
    isochrone_esri,
    isochrone_png,
    isochrone_pois,
    pixel_walktimes,
    pois_walktimes,
    save_png,
)
from walkalytics.datasources.isochrone.client import (
    DEFAULT_BREAK_VALUES,
    DEFAULT_EPSG,
    DEFAULT_MAX_MIN,
    DEFAULT_PNG_FILE,
)
from walkalytics.datasources.pubtrans import get_stops, pubtrans_ch_nearby
from walkalytics.datasources.pubtrans.client import DEFAULT_MAX_WALKTIME
from walkalytics.exceptions import WalkalyticsError
from walkalytics.serialization import read_pois_csv, write_csv

logger = logging.getLogger(__name__)


def _break_values(text: str) -> list[float]:
    try:
        return [float(v) for v in text.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid break values: {text!r}") from None


def _add_isochrone_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("x", type=float, help="x-coordinate of the source location")
    parser.add_argument("y", type=float, help="y-coordinate of the source location")
    parser.add_argument(
        "--epsg",
        type=int,
        default=DEFAULT_EPSG,
        help=f"EPSG code of x and y (default: {DEFAULT_EPSG})",
    )
    parser.add_argument(
        "--max-min",
        type=float,
        default=DEFAULT_MAX_MIN,
        help=f"maximum minutes for the isochrone (default: {DEFAULT_MAX_MIN})",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="walkalytics",
        description="Walking isochrones and nearby public transport from the Walkalytics API",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Subscription key (default: WALKALYTICS_API_KEY)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    png_parser = subparsers.add_parser("png", help="Save the classified isochrone as PNG")
    _add_isochrone_args(png_parser)
    png_parser.add_argument(
        "--breaks",
        type=_break_values,
        default=list(DEFAULT_BREAK_VALUES),
        help="comma-separated break values in minutes (default: 0,3,6,9,13)",
    )
    png_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=DEFAULT_PNG_FILE,
        help=f"output file (default: {DEFAULT_PNG_FILE})",
    )

    pixels_parser = subparsers.add_parser("pixels", help="Walking time to every pixel as CSV")
    _add_isochrone_args(pixels_parser)
    pixels_parser.add_argument(
        "--drop-missing",
        action="store_true",
        help="Leave out unreachable pixels",
    )

    pois_parser = subparsers.add_parser("pois", help="Walking times to points-of-interest as CSV")
    _add_isochrone_args(pois_parser)
    pois_parser.add_argument(
        "--pois-file",
        type=Path,
        required=True,
        help="CSV with x, y and optional id columns",
    )

    stops_parser = subparsers.add_parser("stops", help="Nearby public transport stops as CSV")
    stops_parser.add_argument("x", type=float, help="longitude of the starting point")
    stops_parser.add_argument("y", type=float, help="latitude of the starting point")
    stops_parser.add_argument(
        "--max-walktime",
        type=float,
        default=DEFAULT_MAX_WALKTIME,
        help=f"maximum walking time in minutes (default: {DEFAULT_MAX_WALKTIME})",
    )

    return parser


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger from settings (``DEBUG`` when ``debug``)."""
    level = "DEBUG" if debug else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"API: {settings.api_url}")
    print(f"Key configured: {'yes' if settings.api_key else 'no'}")
    return 0


def cmd_png(args: argparse.Namespace) -> int:
    """Handle the 'png' command."""
    resp = isochrone_png(
        args.x, args.y, epsg=args.epsg, max_min=args.max_min, break_values=args.breaks, key=args.key
    )
    path = save_png(resp, args.output)
    print(f"Saved {path}")
    return 0


def cmd_pixels(args: argparse.Namespace) -> int:
    """Handle the 'pixels' command."""
    resp = isochrone_esri(args.x, args.y, epsg=args.epsg, max_min=args.max_min, key=args.key)
    write_csv(pixel_walktimes(resp, drop_missing=args.drop_missing), sys.stdout)
    return 0


def cmd_pois(args: argparse.Namespace) -> int:
    """Handle the 'pois' command."""
    with args.pois_file.open(newline="") as fh:
        pois = read_pois_csv(fh)
    resp = isochrone_pois(
        args.x, args.y, pois, epsg=args.epsg, max_min=args.max_min, key=args.key
    )
    write_csv(pois_walktimes(resp), sys.stdout)
    return 0


def cmd_stops(args: argparse.Namespace) -> int:
    """Handle the 'stops' command."""
    resp = pubtrans_ch_nearby(args.x, args.y, max_walktime=args.max_walktime, key=args.key)
    write_csv(get_stops(resp), sys.stdout)
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(getattr(args, "debug", False))

    commands = {
        "info": cmd_info,
        "png": cmd_png,
        "pixels": cmd_pixels,
        "pois": cmd_pois,
        "stops": cmd_stops,
    }

    handler = commands.get(args.command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (WalkalyticsError, requests.RequestException, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
