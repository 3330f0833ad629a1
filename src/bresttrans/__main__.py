"""
BrestTrans CLI entry point.

Launches the ridership survey app.

Usage:
    python -m bresttrans                   # Start the app
    python -m bresttrans --stops FILE      # Use a different stop directory
    python -m bresttrans --reset-profile   # Forget registration and start over
    python -m bresttrans --help            # Show help
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .core.config import Config
from .core.profile import ProfileStore


def setup_logging(config: Config) -> None:
    """Configure logging based on config."""
    log_config = config["logging"]
    level = getattr(logging, str(log_config.get("level", "INFO")).upper(), logging.INFO)

    log_file = Path(log_config.get("file", "logs/bresttrans.log")).expanduser()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format=log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="BrestTrans - Transit ridership survey collector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m bresttrans                        Start the app
    python -m bresttrans --stops stops.json     Use a custom stop directory
    python -m bresttrans --reset-profile        Show registration again

Environment:
    OPEN_WEATHER_MAP_API_KEY   API key for weather lookups
    BRESTTRANS_ENV             Config environment (development, production)
        """,
    )

    parser.add_argument(
        "--config", type=str, help="Path to configuration directory"
    )
    parser.add_argument(
        "--stops", type=str, help="Path to stop directory JSON (overrides config)"
    )
    parser.add_argument(
        "--reset-profile", action="store_true", help="Delete the saved profile before starting"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode"
    )

    args = parser.parse_args()

    config_dir = Path(args.config) if args.config else None
    config = Config(config_dir)

    # Apply command-line overrides
    if args.stops:
        os.environ["BRESTTRANS_STOPS_ASSET"] = args.stops
        config.reload()

    if args.debug:
        os.environ["BRESTTRANS_ENV"] = "development"
        os.environ["BRESTTRANS_LOGGING_LEVEL"] = "DEBUG"
        config.env = "development"
        config.reload()

    setup_logging(config)

    logger = logging.getLogger(__name__)
    logger.info("BrestTrans starting...")
    logger.info(f"Environment: {config.env}")

    if args.reset_profile:
        ProfileStore(config.get("profile.file", "~/.bresttrans/profile.yaml")).reset()

    # Imported late so --help works without a display
    from .mobile.app import run_mobile_app

    run_mobile_app(config)


if __name__ == "__main__":
    main()
