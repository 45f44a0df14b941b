"""
Main entry point for the baycheck listing monitor.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .orchestrator import ApplicationOrchestrator
from .utils.error_handling import ConfigurationError
from .utils.logging import get_logger, setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="baycheck",
        description="Monitor marketplace searches and report new matching listings",
    )
    parser.add_argument(
        "config_path",
        nargs="?",
        default=None,
        help="Path to the configuration file (default: search standard locations)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-dir", default="logs", help="Directory for log files (default: logs)"
    )
    parser.add_argument(
        "--once", action="store_true", help="Run a single polling cycle and exit"
    )
    return parser.parse_args(argv)


async def async_main(
    config_path: Optional[str] = None, once: bool = False
) -> int:
    """Async main application entry point."""
    logger = get_logger("main")
    logger.info("Starting baycheck", extra={"config_path": config_path})

    orchestrator = ApplicationOrchestrator(config_path)

    try:
        orchestrator.initialize()
    except ConfigurationError as e:
        logger.critical("Invalid configuration", extra={"error": str(e)})
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    await orchestrator.run(max_cycles=1 if once else None)
    return 0


def main(argv: Optional[List[str]] = None):
    """Main application entry point."""
    args = parse_args(argv)
    setup_logging(log_dir=args.log_dir, log_level=args.log_level)

    try:
        exit_code = asyncio.run(async_main(args.config_path, once=args.once))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        exit_code = 0

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
