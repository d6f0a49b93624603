"""Main CLI application orchestrating all components."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import structlog

from ..models import AppConfiguration, SourceSettings
from ..services import SnapshotMonitor
from ..lib.config import (
    ConfigurationError,
    export_configuration,
    load_configuration,
    load_default_configuration
)
from ..lib.notifications import LogNotificationSink
from ..lib.snapshot_source import SnapshotSource, create_source


logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2

DEFAULT_DISPLAY_LOG_FILE = "fire-alert.log"

# Log file currently receiving output, closed when logging is reconfigured
_log_stream: Optional[TextIO] = None


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure structlog and the standard logging used by the source libraries.

    With a log file, both write there instead of stderr so the terminal
    display is left untouched.
    """
    global _log_stream

    log_level = logging.DEBUG if debug else logging.INFO
    previous_stream = _log_stream
    stream = open(log_file, "a", encoding="utf-8") if log_file else sys.stderr

    logging.basicConfig(
        level=log_level,
        stream=stream,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=stream.isatty())
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )

    _log_stream = stream if log_file else None
    if previous_stream is not None:
        previous_stream.close()


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Fire Alert Monitor - real-time fire, smoke and temperature alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fire-alert --database-url https://my-project.firebaseio.com   # Watch the database root
  fire-alert --config config.yaml                               # Load settings from YAML
  fire-alert --demo                                             # Simulated sensor data
  fire-alert --demo --no-display                                # Log alerts instead of the UI
  fire-alert --export-config config.yaml                        # Write default config and exit
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file"
    )

    parser.add_argument(
        "--database-url",
        type=str,
        help="Realtime database URL (overrides configuration)"
    )

    parser.add_argument(
        "--path",
        type=str,
        help="Database path holding the sensor readings (overrides configuration)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run with simulated sensor data"
    )

    parser.add_argument(
        "--no-display",
        action="store_true",
        help="Run headless: alerts and notices are logged"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help=f"Write logs to PATH (default with the display: {DEFAULT_DISPLAY_LOG_FILE})"
    )

    parser.add_argument(
        "--export-config",
        type=str,
        metavar="PATH",
        help="Export default configuration to the given path and exit"
    )

    return parser


def resolve_configuration(args: argparse.Namespace) -> AppConfiguration:
    """Load configuration and apply command line overrides."""
    if args.config:
        if not Path(args.config).exists():
            raise ConfigurationError(f"Configuration file not found: {args.config}")
        configuration = load_configuration(args.config)
        logger.info("Loaded configuration from file", config_path=args.config)
    else:
        configuration = load_default_configuration()
        logger.debug("Using default configuration")

    source_overrides = {}
    if args.database_url is not None:
        source_overrides["database_url"] = args.database_url
    if args.path is not None:
        source_overrides["path"] = args.path

    if source_overrides:
        try:
            configuration.source = SourceSettings(
                **{**configuration.source.model_dump(), **source_overrides}
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid source option: {e}")

    return configuration


async def run_headless(source: SnapshotSource, configuration: AppConfiguration) -> int:
    """Run the monitor without the display until the source ends."""
    monitor = SnapshotMonitor(
        source,
        LogNotificationSink(),
        alert_title=configuration.notifications.alert_title,
        notifications_enabled=configuration.notifications.enabled
    )

    def log_statuses(evaluation) -> None:
        logger.info("Status", **evaluation.statuses.model_dump())

    monitor.add_update_callback(log_statuses)

    try:
        await monitor.run()
    finally:
        await source.close()

    logger.info("Monitoring finished", **monitor.get_monitoring_stats())
    return EXIT_OK


def run_display(source: SnapshotSource, configuration: AppConfiguration) -> int:
    """Run the Textual display."""
    from ..lib.display import FireAlertApp

    app = FireAlertApp(source, configuration)
    app.run()
    return EXIT_OK


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.debug, args.log_file)

    if args.export_config:
        try:
            export_configuration(load_default_configuration(), args.export_config)
            logger.info("Configuration exported successfully", path=args.export_config)
            return EXIT_OK
        except ConfigurationError as e:
            logger.error("Failed to export configuration", error=str(e))
            return EXIT_ERROR

    try:
        configuration = resolve_configuration(args)
    except ConfigurationError as e:
        logger.error("Configuration error", error=str(e))
        return EXIT_USAGE

    debug = args.debug or configuration.enable_debug_logging
    if debug != args.debug:
        configure_logging(debug, args.log_file)

    if not args.demo and configuration.source.database_url is None:
        logger.error("No database URL configured; use --database-url, "
                     "FIRE_ALERT_DATABASE_URL, a config file, or --demo")
        return EXIT_USAGE

    source = create_source(configuration, demo_mode=args.demo)
    logger.info("Starting fire alert monitor",
                source=source.name,
                display=not args.no_display)

    try:
        if args.no_display:
            return asyncio.run(run_headless(source, configuration))

        configure_logging(debug, args.log_file or DEFAULT_DISPLAY_LOG_FILE)
        return run_display(source, configuration)
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
