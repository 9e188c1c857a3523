# ABOUTME: CLI entry point for notion-blog-sync.
# ABOUTME: Provides 'push', 'pull' and 'serve' commands.

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

from .config import load_config, ConfigError, Config
from .notion import NotionClient
from .scheduler import run_scheduler
from .sync import pull_posts, push_posts

DEFAULT_CONFIG_PATH = Path("notion-sync.yaml")


def setup_logging(log_path: Path | None = None) -> None:
    """Configure logging for the application.

    Args:
        log_path: Optional path for log file. If provided, enables rotating file logging.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_client(config: Config) -> NotionClient:
    return NotionClient(config.get_api_key())


def run_push(config: Config) -> None:
    """Push all local posts to Notion."""
    summary = push_posts(create_client(config), config)

    print("========================================")
    print("Push completed!")
    print(f"  Success: {summary.succeeded}")
    print(f"  Errors: {summary.error_count}")


def run_pull(config: Config) -> None:
    """Pull new and edited posts from Notion."""
    summary = pull_posts(create_client(config), config)

    print("========================================")
    print("Sync completed!")
    print(f"  Written: {summary.succeeded}")
    print(f"  Skipped: {summary.error_count}")


def scheduled_pull(config: Config) -> None:
    """Pull wrapper for the scheduler; a failed run is logged and retried next time."""
    logger = logging.getLogger(__name__)
    try:
        run_pull(config)
    except Exception as e:
        logger.error(f"Scheduled pull failed: {e}")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="notion-blog-sync",
        description="Sync a Markdown blog with a Notion data source",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to optional config file (default: {DEFAULT_CONFIG_PATH})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("push", help="Create Notion pages from local Markdown posts")
    subparsers.add_parser("pull", help="Write Notion pages edited since the last pull as Markdown")
    subparsers.add_parser("serve", help="Run pull on the configured cron schedule")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(config.log_file)
    logger = logging.getLogger(__name__)

    commands = {
        "push": run_push,
        "pull": run_pull,
        "serve": lambda cfg: run_scheduler(cfg, scheduled_pull),
    }

    try:
        commands[args.command](config)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"{args.command.capitalize()} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
