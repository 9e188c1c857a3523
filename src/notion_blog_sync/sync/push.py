# ABOUTME: Push pipeline: local Markdown posts -> Notion pages.
# ABOUTME: Walks the content directory and publishes each post, isolating per-file failures.

import logging
import time
from pathlib import Path
from typing import Callable

from ..config import Config, ConfigError
from ..markdown import parse_frontmatter
from ..notion import NotionClient, publish_post
from .summary import SyncSummary

logger = logging.getLogger(__name__)


def find_markdown_files(root: Path) -> list[Path]:
    """Return all Markdown files under root, recursively, in sorted order."""
    return sorted(p for p in root.rglob("*.md") if p.is_file())


def push_posts(
    client: NotionClient,
    config: Config,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncSummary:
    """Create a Notion page for every Markdown post in the content directory.

    A file that can't be read, parsed or published is logged and counted
    as an error; the remaining files are still processed.

    Args:
        client: The Notion API client.
        config: Application configuration.
        sleep: Called with ``config.publish_delay`` after every created page.

    Returns:
        SyncSummary with success and error counts.
    """
    data_source_id = config.get_data_source_id()
    content_dir = config.content_dir
    if not content_dir.is_dir():
        raise ConfigError(f"Content directory not found: {content_dir}")

    logger.info("Scanning for markdown files...")
    files = find_markdown_files(content_dir)
    logger.info(f"Found {len(files)} markdown files")

    summary = SyncSummary()

    for file_path in files:
        relative = str(file_path.relative_to(content_dir))
        logger.info(f"Processing: {relative}")

        try:
            text = file_path.read_text(encoding="utf-8")
            parsed = parse_frontmatter(text)

            if not parsed.frontmatter.is_publishable():
                logger.warning(f"Skipping {relative}: missing title or date")
                summary.record_error(relative, "missing title or date")
                continue

            page_id = publish_post(
                client,
                data_source_id,
                parsed.frontmatter,
                parsed.content,
                config.properties,
            )
            logger.info(f"Created Notion page: {page_id}")
            summary.succeeded += 1

            sleep(config.publish_delay)
        except Exception as e:
            logger.error(f"Failed to push {relative}: {e}")
            summary.record_error(relative, str(e))

    logger.info(
        f"Push complete: {summary.succeeded} succeeded, "
        f"{summary.error_count} errors [{summary.status}]"
    )
    return summary
