"""
Google Maps client - command line front end.

Loads the TOML configuration, builds a client and runs a single request,
printing the decoded response as JSON.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List

from internal.config.manager import ConfigManager
from lib.google_maps import GoogleMapsClient, GoogleMapsError, LatLng, ResponseEnvelope
from lib.google_maps.enums import TRAVEL_MODES
from lib.logging_utils import initLogging
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


def parse_arguments(argv: List[str] | None = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Google Maps web services client, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--dotenv",
        default=".env",
        help="Path to .env file with environment variables (default: .env)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration (API key masked) and exit, dood!",
    )

    subparsers = parser.add_subparsers(dest="command")

    geocode = subparsers.add_parser("geocode", help="Geocode an address")
    geocode.add_argument("address")
    geocode.add_argument("--region", help="Region bias (ccTLD)")

    reverse = subparsers.add_parser("reverse", help="Reverse geocode a 'lat,lng' point")
    reverse.add_argument("latlng")

    elevation = subparsers.add_parser("elevation", help="Elevation of one or more 'lat,lng' points")
    elevation.add_argument("locations", nargs="+")

    timezone = subparsers.add_parser("timezone", help="Time zone of a 'lat,lng' point")
    timezone.add_argument("latlng")
    timezone.add_argument("--timestamp", type=int, default=0, help="Unix timestamp (default: 0)")

    distance = subparsers.add_parser("distance", help="Distance matrix between origins and destinations")
    distance.add_argument("--origin", action="append", required=True, help="Origin (repeatable)")
    distance.add_argument("--destination", action="append", required=True, help="Destination (repeatable)")
    distance.add_argument("--mode", choices=TRAVEL_MODES.tokens(), help="Travel mode")

    args = parser.parse_args(argv)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]
    if not args.print_config and args.command is None:
        parser.error("a command is required unless --print-config is given")

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration, dood!"""
    config: Dict[str, Any] = dict(configManager.config)
    section = dict(configManager.getGoogleMapsConfig())
    if "api-key" in section:
        section["api-key"] = "***"
    config["google-maps"] = section

    print("=== Google Maps Client Configuration ===")
    print()
    print(jsonDumps(config, indent=2))
    print()
    print("=== Configuration loaded successfully, dood! ===")


async def runCommand(client: GoogleMapsClient, args) -> ResponseEnvelope:
    """Run the request selected on the command line."""
    match args.command:
        case "geocode":
            return await client.geocode(args.address, region=args.region)
        case "reverse":
            return await client.reverseGeocode(LatLng.parse(args.latlng))
        case "elevation":
            return await client.elevation(*[LatLng.parse(location) for location in args.locations])
        case "timezone":
            return await client.timeZone(LatLng.parse(args.latlng), args.timestamp)
        case "distance":
            mode = TRAVEL_MODES.parse(args.mode) if args.mode else None
            return await client.distanceMatrix(args.origin, args.destination, mode=mode)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


async def run(configManager: ConfigManager, args) -> ResponseEnvelope:
    async with configManager.getClientConfiguration().build() as client:
        return await runCommand(client, args)


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    configManager = ConfigManager(configPath=args.config, configDirs=args.config_dir, dotEnvFile=args.dotenv)
    if args.print_config:
        prettyPrintConfig(configManager)
        return 0

    apiKey = configManager.getApiKey()
    initLogging(configManager.getLoggingConfig(), secrets=[apiKey])

    try:
        envelope = asyncio.run(run(configManager, args))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 130
    except GoogleMapsError as e:
        logger.error(f"Request failed: {e}")
        return 1

    print(jsonDumps(envelope.data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
