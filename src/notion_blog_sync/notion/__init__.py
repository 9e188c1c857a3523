# ABOUTME: Notion API integration package.
# ABOUTME: Exports the client wrapper and page publishing/fetching functions.

from .client import NotionAPIError, NotionClient
from .pages import build_properties, chunk_blocks, fetch_blocks_recursive, publish_post

__all__ = [
    "NotionAPIError",
    "NotionClient",
    "build_properties",
    "chunk_blocks",
    "fetch_blocks_recursive",
    "publish_post",
]
