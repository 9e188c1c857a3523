# ABOUTME: Reads and writes the frontmatter header of blog post Markdown files.
# ABOUTME: Uses a permissive line-based parser rather than a full YAML loader.

import re
from dataclasses import dataclass, field
from typing import Any

FRONTMATTER_RE = re.compile(r"^---\n([\s\S]*?)\n---\n([\s\S]*)$")

KNOWN_KEYS = {"title", "date", "slug", "tags", "categories", "description", "draft"}


class FrontmatterError(ValueError):
    """Raised when a Markdown file has no frontmatter block."""
    pass


@dataclass
class Frontmatter:
    """Metadata header of a blog post."""
    title: str = ""
    date: str = ""
    slug: str | None = None
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    description: str | None = None
    draft: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def is_publishable(self) -> bool:
        return bool(self.title) and bool(self.date)


@dataclass
class ParsedMarkdown:
    frontmatter: Frontmatter
    content: str


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_value(raw: str) -> str | bool | list[str]:
    """Classify a raw header value as a list, a boolean or a plain string."""
    value = _unquote(raw.strip())

    if value.startswith("[") and value.endswith("]"):
        items = [_unquote(item.strip()) for item in value[1:-1].split(",")]
        return [item for item in items if item]
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _as_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return value
    if isinstance(value, bool):
        return [_as_text(value)]
    return [value] if value else []


def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    return None


def parse_frontmatter(text: str) -> ParsedMarkdown:
    """Split a Markdown file into its frontmatter record and body.

    Args:
        text: Whole file contents.

    Returns:
        ParsedMarkdown with the typed header and the stripped body.

    Raises:
        FrontmatterError: If the file does not start with a ``---`` delimited block.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        raise FrontmatterError("Invalid markdown file: no frontmatter found")

    header, body = match.groups()
    values: dict[str, Any] = {}

    for line in header.split("\n"):
        key, sep, raw = line.partition(":")
        if not sep:
            continue
        values[key.strip()] = parse_value(raw)

    frontmatter = Frontmatter(
        title=_as_text(values.get("title", "")),
        date=_as_text(values.get("date", "")),
        slug=_as_text(values["slug"]) if values.get("slug") else None,
        tags=_as_list(values.get("tags", [])),
        categories=_as_list(values.get("categories", [])),
        description=_as_text(values["description"]) if "description" in values else None,
        draft=_as_bool(values.get("draft")),
        extra={k: v for k, v in values.items() if k not in KNOWN_KEYS},
    )
    return ParsedMarkdown(frontmatter=frontmatter, content=body.strip())


def render_frontmatter(title: str, date: str, slug: str, tags: list[str]) -> str:
    """Generate the frontmatter block written for pulled posts (without trailing newline)."""
    escaped_title = title.replace('"', '\\"')
    lines = [
        "---",
        f'title: "{escaped_title}"',
        f"date: {date}",
        f"slug: {slug}",
    ]
    if tags:
        lines.append("tags: [" + ", ".join(f"'{tag}'" for tag in tags) + "]")
    lines.append("draft: false")
    lines.append("---")
    return "\n".join(lines)
