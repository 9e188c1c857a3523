# ABOUTME: Page-level Notion operations for blog posts.
# ABOUTME: Publishes posts as pages in block batches and recursively fetches page content.

import logging
from typing import Iterator

from ..config import PropertyNames
from ..markdown import Frontmatter, markdown_to_blocks
from .client import MAX_BLOCKS_PER_REQUEST, NotionClient

logger = logging.getLogger(__name__)

# Block types that can have children
BLOCKS_WITH_CHILDREN = {
    "paragraph",
    "bulleted_list_item",
    "numbered_list_item",
    "toggle",
    "to_do",
    "quote",
    "callout",
    "synced_block",
    "template",
    "column",
    "column_list",
    "table",
    "table_row",
}


def fetch_blocks_recursive(client: NotionClient, block_id: str) -> list[dict]:
    """Fetch all blocks under a parent, recursively fetching children.

    Args:
        client: The Notion API client.
        block_id: The ID of the parent block or page.

    Returns:
        List of blocks with their children populated in-place.
    """
    blocks = client.get_blocks(block_id)

    for block in blocks:
        block_type = block.get("type")
        has_children = block.get("has_children", False)

        if has_children and block_type in BLOCKS_WITH_CHILDREN:
            block["children"] = fetch_blocks_recursive(client, block["id"])

    return blocks


def strip_time(date: str) -> str:
    """Drop any time component from a date string ("2024-01-02 10:00" -> "2024-01-02")."""
    return date.split(" ")[0].split("T")[0]


def build_properties(frontmatter: Frontmatter, names: PropertyNames) -> dict:
    """Map frontmatter fields onto the blog data source's properties."""
    properties: dict = {
        names.title: {
            "title": [{"text": {"content": frontmatter.title}}],
        },
        names.date: {
            "date": {"start": strip_time(frontmatter.date)},
        },
    }

    all_tags = [*frontmatter.tags, *frontmatter.categories]
    if all_tags:
        properties[names.tags] = {
            "multi_select": [{"name": tag} for tag in all_tags],
        }

    if frontmatter.slug:
        properties[names.slug] = {
            "rich_text": [{"text": {"content": frontmatter.slug}}],
        }

    return properties


def chunk_blocks(blocks: list[dict], size: int = MAX_BLOCKS_PER_REQUEST) -> Iterator[list[dict]]:
    """Yield consecutive slices of at most ``size`` blocks."""
    for start in range(0, len(blocks), size):
        yield blocks[start:start + size]


def publish_post(
    client: NotionClient,
    data_source_id: str,
    frontmatter: Frontmatter,
    content: str,
    names: PropertyNames | None = None,
) -> str:
    """Create a Notion page for a blog post.

    The first batch of blocks is sent with the page creation request; the
    remaining batches are appended one after another in their original order.

    Args:
        client: The Notion API client.
        data_source_id: Data source the page is created in.
        frontmatter: Parsed post metadata.
        content: Post body in Markdown.
        names: Property names of the data source.

    Returns:
        The ID of the created page.
    """
    names = names or PropertyNames()
    properties = build_properties(frontmatter, names)
    blocks = markdown_to_blocks(content)

    first_chunk = blocks[:MAX_BLOCKS_PER_REQUEST]
    page_id = client.create_page(data_source_id, properties, first_chunk)

    for chunk in chunk_blocks(blocks[MAX_BLOCKS_PER_REQUEST:]):
        client.append_children(page_id, chunk)

    logger.debug(f"Published '{frontmatter.title}' with {len(blocks)} blocks as {page_id}")
    return page_id
