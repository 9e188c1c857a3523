# ABOUTME: Wrapper around the official Notion Python SDK.
# ABOUTME: Provides the page creation, block append and data source query calls used by the sync.

import functools
import logging

from notion_client import Client
from notion_client.errors import HTTPResponseError
from notion_client.helpers import collect_paginated_api

logger = logging.getLogger(__name__)

NOTION_API_BASE = "https://api.notion.com"
NOTION_VERSION = "2025-09-03"

# Notion rejects more than 100 children per request
MAX_BLOCKS_PER_REQUEST = 100


class NotionAPIError(Exception):
    """Raised when the Notion API answers with a non-success status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Notion API error: {status} - {body}")
        self.status = status
        self.body = body


def wrap_api_errors(func):
    """Decorator translating SDK HTTP errors into NotionAPIError."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HTTPResponseError as e:
            raise NotionAPIError(e.status, getattr(e, "body", str(e))) from e
    return wrapper


class NotionClient:
    """Wrapper around the Notion SDK client, pinned to one API version."""

    def __init__(self, token: str, client: Client | None = None):
        self._client = client or Client(
            auth=token,
            base_url=NOTION_API_BASE,
            notion_version=NOTION_VERSION,
        )

    @wrap_api_errors
    def create_page(self, data_source_id: str, properties: dict, children: list[dict]) -> str:
        """Create a page in a data source and return its ID."""
        if len(children) > MAX_BLOCKS_PER_REQUEST:
            raise ValueError(f"At most {MAX_BLOCKS_PER_REQUEST} blocks per request, got {len(children)}")
        page = self._client.pages.create(
            parent={"type": "data_source_id", "data_source_id": data_source_id},
            properties=properties,
            children=children,
        )
        return page["id"]

    @wrap_api_errors
    def append_children(self, block_id: str, children: list[dict]) -> None:
        """Append blocks to the end of a page or block."""
        if len(children) > MAX_BLOCKS_PER_REQUEST:
            raise ValueError(f"At most {MAX_BLOCKS_PER_REQUEST} blocks per request, got {len(children)}")
        self._client.blocks.children.append(block_id=block_id, children=children)

    @wrap_api_errors
    def query_data_source(
        self,
        data_source_id: str,
        start_cursor: str | None = None,
        filter: dict | None = None,
        sorts: list[dict] | None = None,
    ) -> dict:
        """Query one page of results from a data source.

        Returns:
            The raw response with "results", "has_more" and "next_cursor".
        """
        params: dict = {"data_source_id": data_source_id}
        if start_cursor:
            params["start_cursor"] = start_cursor
        if filter:
            params["filter"] = filter
        if sorts:
            params["sorts"] = sorts
        return self._client.data_sources.query(**params)

    @wrap_api_errors
    def get_blocks(self, block_id: str) -> list[dict]:
        """Retrieve all child blocks of a block/page."""
        return collect_paginated_api(
            self._client.blocks.children.list,
            block_id=block_id,
        )
