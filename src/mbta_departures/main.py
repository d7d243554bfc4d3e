"""Main entry point for the MBTA departures report."""

import argparse
import asyncio
import logging
import sys

import aiohttp
from pydantic import ValidationError

from mbta_departures.adapters.config import AppConfig, StopDescriptorLoader
from mbta_departures.adapters.mbta_api import MbtaTimeSourceRepository
from mbta_departures.adapters.terminal import DepartureFormatter, TerminalReportRenderer
from mbta_departures.application.services import FleetAggregator
from mbta_departures.domain.exceptions import RateLimitedError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "⚠️  MBTA API rate limit exceeded. Please wait a moment and try again."

EXIT_OK = 0
EXIT_FAILURE = 1


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show the next departures for configured MBTA stops",
    )
    parser.add_argument(
        "--config",
        help="Path to the TOML stops file (overrides CONFIG_FILE)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def main(config: AppConfig) -> int:
    """Fetch, merge and print departures for every configured stop.

    Returns:
        Process exit status.
    """
    try:
        stops = StopDescriptorLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid stops configuration: {e}")
        return EXIT_FAILURE

    async with aiohttp.ClientSession() as session:
        aggregator = FleetAggregator(MbtaTimeSourceRepository(session=session, config=config))
        try:
            report = await aggregator.collect(stops)
        except RateLimitedError:
            print(RATE_LIMIT_MESSAGE, file=sys.stderr)
            return EXIT_FAILURE

    if report.failed:
        logger.info(f"{len(report.failed)} of {len(report.results)} stop(s) unavailable")

    renderer = TerminalReportRenderer(DepartureFormatter(config))
    print(renderer.render(report), end="")
    return EXIT_OK


def cli_main(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the console script."""
    args = _parse_args(argv)

    overrides = {"config_file": args.config} if args.config else {}
    try:
        config = AppConfig(**overrides)
    except ValidationError as e:
        _configure_logging("ERROR")
        logger.error(f"Invalid configuration: {e}")
        sys.exit(EXIT_FAILURE)

    _configure_logging("DEBUG" if args.verbose else config.log_level)

    try:
        sys.exit(asyncio.run(main(config)))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    cli_main()
