# ABOUTME: Pull pipeline: Notion pages -> local Markdown posts.
# ABOUTME: Queries the data source incrementally and writes year-bucketed post files.

import logging
from datetime import datetime, timezone

from ..config import Config
from ..markdown import (
    Post,
    PostWriter,
    blocks_to_markdown,
    generate_slug,
    get_property,
    parse_post_date,
    sanitize_slug,
)
from ..notion import NotionClient, fetch_blocks_recursive
from .state import SyncState, SyncStateStore
from .summary import SyncSummary

logger = logging.getLogger(__name__)


def build_query_filter(last_sync_time: str | None) -> dict | None:
    """Filter for pages edited after the last sync, or None for a full sync."""
    if not last_sync_time:
        return None
    return {
        "timestamp": "last_edited_time",
        "last_edited_time": {"after": last_sync_time},
    }


def post_date(page: dict, config: Config) -> str | None:
    """Published date of a page, falling back to its creation time."""
    names = config.properties
    return get_property(page, names.date) or get_property(page, names.created)


def skip_reason(page: dict, config: Config) -> str | None:
    """Why a page can't become a post, or None if it can."""
    title = get_property(page, config.properties.title)
    date = post_date(page, config)
    if not title or not date:
        return "missing title or date"
    try:
        parse_post_date(date)
    except ValueError:
        return f"invalid date {date!r}"
    return None


def page_to_post(client: NotionClient, page: dict, config: Config) -> Post:
    """Build a Post from a data source page, rendering its blocks as Markdown."""
    names = config.properties
    title = get_property(page, names.title)
    content = blocks_to_markdown(fetch_blocks_recursive(client, page["id"]))

    return Post(
        id=page["id"],
        title=title,
        slug=sanitize_slug(get_property(page, names.slug) or generate_slug(title)),
        date=post_date(page, config),
        tags=get_property(page, names.tags) or [],
        content=content,
    )


def fetch_posts(
    client: NotionClient,
    config: Config,
    last_sync_time: str | None,
    summary: SyncSummary,
) -> list[Post]:
    """Query the blog data source and convert every usable page to a Post.

    Args:
        client: The Notion API client.
        config: Application configuration.
        last_sync_time: Only pages edited after this instant are fetched, if set.
        summary: Receives an error entry for every skipped page.

    Returns:
        List of posts, newest first.
    """
    data_source_id = config.get_data_source_id()
    query_filter = build_query_filter(last_sync_time)
    sorts = [{"property": config.properties.date, "direction": "descending"}]

    if last_sync_time:
        logger.info(f"Incremental sync: fetching posts edited after {last_sync_time}")
    else:
        logger.info("Full sync: fetching all posts")

    posts = []
    cursor = None
    while True:
        response = client.query_data_source(
            data_source_id,
            start_cursor=cursor,
            filter=query_filter,
            sorts=sorts,
        )

        for page in response["results"]:
            if "properties" not in page:
                continue

            reason = skip_reason(page, config)
            if reason:
                logger.warning(f"Skipping page {page['id']}: {reason}")
                summary.record_error(page["id"], reason)
                continue

            posts.append(page_to_post(client, page, config))

        if not response.get("has_more"):
            break
        cursor = response.get("next_cursor")

    return posts


def pull_posts(client: NotionClient, config: Config, now: datetime | None = None) -> SyncSummary:
    """Pull posts from Notion into the content directory.

    The sync state is saved only after every post has been written, so a
    failed run is retried in full by the next one.

    Args:
        client: The Notion API client.
        config: Application configuration.
        now: Sync timestamp to record; defaults to the current UTC time.

    Returns:
        SyncSummary with written and skipped counts.
    """
    store = SyncStateStore(config.state_file)
    state = store.load()

    # Taken before querying so pages edited mid-run are fetched next time
    current_sync_time = (now or datetime.now(timezone.utc)).isoformat()

    summary = SyncSummary()

    logger.info("Fetching posts from Notion...")
    posts = fetch_posts(client, config, state.last_sync_time if state else None, summary)

    if not posts:
        logger.info("No new posts to sync")
    else:
        logger.info(f"Found {len(posts)} new posts to sync")
        written = PostWriter(config.content_dir).write_posts(posts)
        summary.succeeded = len(written)

    store.save(SyncState(last_sync_time=current_sync_time))
    logger.info(
        f"Pull complete: {summary.succeeded} written, {summary.error_count} skipped "
        f"[{summary.status}]; state saved with timestamp {current_sync_time}"
    )
    return summary
