# ABOUTME: Tests for the pull pipeline.
# ABOUTME: Covers full and incremental syncs, file naming and sync state handling.

import json
from datetime import datetime, timezone

import pytest

from notion_blog_sync.notion import NotionAPIError
from notion_blog_sync.sync import SyncState, SyncStateStore, build_query_filter, pull_posts

from fakes import FakeNotionClient, make_page, paragraph

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def three_posts():
    pages = [
        make_page("p3", "Third Post", "2024-03-01", tags=["b"]),
        make_page("p2", "Second Post", "2024-02-01"),
        make_page("p1", "First Post", "2024-01-01", slug="custom-first", tags=["a", "b"]),
    ]
    blocks = {page["id"]: [paragraph(f"Body {page['id']}")] for page in pages}
    return pages, blocks


def year_files(config, year):
    return sorted(p.name for p in (config.content_dir / str(year)).iterdir())


def test_build_query_filter():
    assert build_query_filter(None) is None
    assert build_query_filter("2024-01-01T00:00:00Z") == {
        "timestamp": "last_edited_time",
        "last_edited_time": {"after": "2024-01-01T00:00:00Z"},
    }


def test_full_sync_without_state(config):
    pages, blocks = three_posts()
    client = FakeNotionClient(query_pages=pages, blocks=blocks)

    summary = pull_posts(client, config, now=NOW)

    assert client.queries[0]["filter"] is None
    assert client.queries[0]["data_source_id"] == "ds-123"
    assert client.queries[0]["sorts"] == [{"property": "Published", "direction": "descending"}]
    assert summary.succeeded == 3
    assert year_files(config, 2024) == ["01-custom-first.md", "02-second-post.md", "03-third-post.md"]


def test_written_file_contents(config):
    pages, blocks = three_posts()
    pull_posts(FakeNotionClient(query_pages=pages, blocks=blocks), config, now=NOW)

    text = (config.content_dir / "2024" / "01-custom-first.md").read_text(encoding="utf-8")
    assert text == (
        "---\n"
        'title: "First Post"\n'
        "date: 2024-01-01\n"
        "slug: custom-first\n"
        "tags: ['a', 'b']\n"
        "draft: false\n"
        "---\n"
        "\n"
        "Body p1\n"
    )


def test_incremental_sync_uses_stored_timestamp(config):
    SyncStateStore(config.state_file).save(SyncState(last_sync_time="2024-05-01T00:00:00+00:00"))
    client = FakeNotionClient()

    pull_posts(client, config, now=NOW)

    assert client.queries[0]["filter"] == {
        "timestamp": "last_edited_time",
        "last_edited_time": {"after": "2024-05-01T00:00:00+00:00"},
    }


def test_state_saved_with_time_taken_before_query(config):
    pull_posts(FakeNotionClient(), config, now=NOW)

    data = json.loads(config.state_file.read_text(encoding="utf-8"))
    assert data == {"lastSyncTime": NOW.isoformat()}


def test_corrupt_state_triggers_full_sync(config):
    config.state_file.write_text("{not json", encoding="utf-8")
    client = FakeNotionClient()

    pull_posts(client, config, now=NOW)

    assert client.queries[0]["filter"] is None


def test_null_sync_time_triggers_full_sync(config):
    config.state_file.write_text('{"lastSyncTime": null}', encoding="utf-8")
    client = FakeNotionClient()

    pull_posts(client, config, now=NOW)

    assert client.queries[0]["filter"] is None
    assert SyncStateStore(config.state_file).load() == SyncState(last_sync_time=NOW.isoformat())


def test_resync_overwrites_existing_slug(config):
    pages, blocks = three_posts()
    pull_posts(FakeNotionClient(query_pages=pages, blocks=blocks), config, now=NOW)

    edited = make_page("p2", "Second Post", "2024-02-01")
    new = make_page("p4", "Fourth Post", "2024-04-01")
    client = FakeNotionClient(
        query_pages=[new, edited],
        blocks={"p2": [paragraph("Edited body")], "p4": [paragraph("New body")]},
    )
    pull_posts(client, config, now=NOW)

    assert year_files(config, 2024) == [
        "01-custom-first.md",
        "02-second-post.md",
        "03-third-post.md",
        "04-fourth-post.md",
    ]
    assert "Edited body" in (config.content_dir / "2024" / "02-second-post.md").read_text(encoding="utf-8")


def test_paginates_through_all_results(config):
    pages = [make_page(f"p{i}", f"Post {i}", f"2024-01-{i + 1:02d}") for i in range(5)]
    client = FakeNotionClient(query_pages=pages, page_size=2)

    summary = pull_posts(client, config, now=NOW)

    assert [q["start_cursor"] for q in client.queries] == [None, "2", "4"]
    assert summary.succeeded == 5


def test_pages_without_title_or_date_are_skipped(config):
    pages = [
        make_page("untitled", None, "2024-01-01"),
        make_page("undated", "No Date"),
        make_page("created", "Created Only", created="2023-07-04T10:00:00.000Z"),
        make_page("bad-date", "Bad", "someday"),
    ]
    client = FakeNotionClient(query_pages=pages)

    summary = pull_posts(client, config, now=NOW)

    assert summary.succeeded == 1
    assert summary.error_count == 3
    assert {e["item"] for e in summary.errors} == {"untitled", "undated", "bad-date"}
    assert year_files(config, 2023) == ["01-created-only.md"]


def test_posts_bucketed_by_year(config):
    pages = [
        make_page("a", "New Year", "2025-01-02"),
        make_page("b", "Old Year", "2024-12-30"),
    ]
    pull_posts(FakeNotionClient(query_pages=pages), config, now=NOW)

    assert year_files(config, 2025) == ["01-new-year.md"]
    assert year_files(config, 2024) == ["01-old-year.md"]


class FailingQueryClient(FakeNotionClient):
    def query_data_source(self, *args, **kwargs):
        raise NotionAPIError(500, "server error")


def test_failed_pull_does_not_save_state(config):
    with pytest.raises(NotionAPIError):
        pull_posts(FailingQueryClient(), config, now=NOW)

    assert not config.state_file.exists()


def test_slug_with_path_separators_stays_in_year_dir(config):
    pages = [
        make_page("p2", "Second", "2024-02-01", slug="../escape"),
        make_page("p1", "First", "2024-01-01", slug="notes/a"),
    ]
    client = FakeNotionClient(query_pages=pages, blocks={"p1": [paragraph("a")], "p2": [paragraph("b")]})

    summary = pull_posts(client, config, now=NOW)

    assert summary.succeeded == 2
    assert year_files(config, 2024) == ["01-notes-a.md", "02-escape.md"]
    assert sorted(p.name for p in config.content_dir.iterdir()) == ["2024"]
    assert "slug: notes-a\n" in (config.content_dir / "2024" / "01-notes-a.md").read_text(encoding="utf-8")
    assert SyncStateStore(config.state_file).load() == SyncState(last_sync_time=NOW.isoformat())
