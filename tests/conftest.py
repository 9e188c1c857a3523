# ABOUTME: Shared fixtures for notion-blog-sync tests.
# ABOUTME: Provides a Config pointing at a temporary content directory.

from pathlib import Path

import pytest

from notion_blog_sync.config import Config


@pytest.fixture
def config(tmp_path: Path, monkeypatch) -> Config:
    monkeypatch.setenv("NOTION_API_KEY", "secret_test")
    monkeypatch.setenv("NOTION_DATASOURCE_ID", "ds-123")
    return Config(
        content_dir=tmp_path / "content",
        state_file=tmp_path / ".notion-sync-state.json",
        publish_delay=0,
    )
