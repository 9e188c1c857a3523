# ABOUTME: Writes pulled blog posts as Markdown files bucketed by publication year.
# ABOUTME: Handles slug generation and the NN-slug.md filename index bookkeeping.

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .frontmatter import render_frontmatter

logger = logging.getLogger(__name__)

SLUG_STRIP_RE = re.compile(r"[^a-z0-9\u4e00-\u9fa5]+")
INDEX_PREFIX_RE = re.compile(r"^(\d+)-")
UNSAFE_FILENAME_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
MIN_INDEX_WIDTH = 2


@dataclass
class Post:
    """A blog post fetched from Notion, ready to be written to disk."""
    id: str
    title: str
    slug: str
    date: str
    tags: list[str] = field(default_factory=list)
    content: str = ""


def generate_slug(title: str) -> str:
    """Generate a URL slug from a title, keeping Latin letters, digits and CJK characters.

    >>> generate_slug("你好, World!")
    '你好-world'
    """
    return SLUG_STRIP_RE.sub("-", title.lower()).strip("-")


def sanitize_slug(slug: str) -> str:
    """Make a slug safe to use as part of a filename.

    Path separators and other characters that filesystems reject become
    hyphens, so a slug can never point outside its year directory.

    >>> sanitize_slug("../notes/a")
    'notes-a'
    """
    safe = UNSAFE_FILENAME_RE.sub("-", slug)
    safe = re.sub(r"\s+", "-", safe)
    safe = safe.strip(". -")
    return safe or "untitled"


def parse_post_date(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC.

    Raises:
        ValueError: If the value is not an ISO 8601 date.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def file_slug(filename: str) -> str:
    """Return the slug segment of an ``NN-slug.md`` filename."""
    stem = filename[:-3] if filename.endswith(".md") else filename
    return INDEX_PREFIX_RE.sub("", stem, count=1)


def max_file_index(filenames: list[str]) -> int:
    """Return the highest numeric prefix among filenames, or 0 if none have one."""
    max_index = 0
    for name in filenames:
        match = INDEX_PREFIX_RE.match(name)
        if match:
            max_index = max(max_index, int(match.group(1)))
    return max_index


def assign_filenames(posts: list[Post], existing: list[str]) -> list[tuple[Post, str]]:
    """Decide the filename for each post of a single year.

    Posts are ordered by date, oldest first. A post whose slug matches the
    slug segment of an existing file reuses that file; every other post gets
    the next free index after the highest existing one.

    Args:
        posts: Posts published in the same year.
        existing: Names of the Markdown files already in the year directory.

    Returns:
        List of (post, filename) pairs in write order.
    """
    by_slug = {file_slug(name): name for name in sorted(existing)}
    next_index = max_file_index(existing) + 1

    assignments = []
    for post in sorted(posts, key=lambda p: parse_post_date(p.date)):
        slug = sanitize_slug(post.slug)
        filename = by_slug.get(slug)
        if filename is None:
            filename = f"{next_index:0{MIN_INDEX_WIDTH}d}-{slug}.md"
            by_slug[slug] = filename
            next_index += 1
        assignments.append((post, filename))

    return assignments


def render_post(post: Post) -> str:
    """Render the complete file contents for a post."""
    frontmatter = render_frontmatter(post.title, post.date, post.slug, post.tags)
    return f"{frontmatter}\n\n{post.content}"


class PostWriter:
    """Writes pulled posts into ``<content_dir>/<year>/NN-slug.md`` files."""

    def __init__(self, content_dir: Path):
        """Initialize the writer.

        Args:
            content_dir: Root of the blog content collection.
        """
        self.content_dir = content_dir

    def write_posts(self, posts: list[Post]) -> list[Path]:
        """Write all posts, grouped by year, and return the written paths."""
        by_year: dict[int, list[Post]] = {}
        for post in posts:
            by_year.setdefault(parse_post_date(post.date).year, []).append(post)

        written = []
        for year, year_posts in by_year.items():
            written.extend(self.write_year(year, year_posts))
        return written

    def write_year(self, year: int, posts: list[Post]) -> list[Path]:
        year_dir = self.content_dir / str(year)
        year_dir.mkdir(parents=True, exist_ok=True)

        existing = [p.name for p in year_dir.iterdir() if p.is_file() and p.suffix == ".md"]

        written = []
        for post, filename in assign_filenames(posts, existing):
            file_path = year_dir / filename
            if filename in existing:
                logger.info(f"Updating existing file: {filename}")

            with open(file_path, "w", encoding="utf-8") as f:
                f.write(render_post(post))

            logger.info(f"Written: {file_path}")
            written.append(file_path)

        return written
