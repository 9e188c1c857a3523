# ABOUTME: Sync pipelines package.
# ABOUTME: Exports the push and pull pipelines, sync state store and run summary.

from .pull import build_query_filter, fetch_posts, pull_posts
from .push import find_markdown_files, push_posts
from .state import SyncState, SyncStateStore
from .summary import SyncSummary

__all__ = [
    "build_query_filter",
    "fetch_posts",
    "pull_posts",
    "find_markdown_files",
    "push_posts",
    "SyncState",
    "SyncStateStore",
    "SyncSummary",
]
