"""Command-line entry point: load configuration, set up logging, run uvicorn."""
import argparse
import os
import sys
from typing import List, Optional

import uvicorn

from sysapi.config import DEFAULT_CONFIG_PATH, Settings
from sysapi.errors import ConfigError
from sysapi.logging_config import configure_logging
from sysapi.main import create_app
from sysapi.version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysapi",
        description="Serve host telemetry (uptime, disk, OS, VMs) as JSON over HTTP.",
    )
    parser.add_argument(
        "-c", "-config", "--config",
        dest="config",
        default=os.getenv("SYSAPI_CONFIG", DEFAULT_CONFIG_PATH),
        help="path of the key=value config file (default: %(default)s)",
    )
    parser.add_argument("-a", "-address", "--address", dest="address", help="listen address")
    parser.add_argument("-p", "-port", "--port", dest="port", type=int, help="listen port")
    parser.add_argument("-l", "-logfile", "--logfile", dest="logfile", help="JSON log file")
    parser.add_argument(
        "-v", "-version", "--version",
        dest="version",
        action="store_true",
        help="print the version and exit",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Read the config file and apply command-line overrides on top of it."""
    settings = Settings.from_file(args.config).with_overrides(
        address=args.address,
        port=args.port,
        logfile=args.logfile,
    )
    if not settings.logfile:
        raise ConfigError("no logfile configured; set 'logfile' in the config file or pass -l")
    return settings


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    try:
        settings = load_settings(args)
        logger = configure_logging(settings.logfile, settings.log_level)
    except ConfigError as exc:
        print(f"sysapi: {exc}", file=sys.stderr)
        return 1

    logger.info("Starting sysapi %s on %s:%d", __version__, settings.address, settings.port)
    uvicorn.run(
        create_app(settings, logger),
        host=settings.address,
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
