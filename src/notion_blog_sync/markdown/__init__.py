# ABOUTME: Markdown conversion package.
# ABOUTME: Exports frontmatter handling, both conversion directions and the post writer.

from .blocks import markdown_to_blocks
from .converter import blocks_to_markdown, extract_property_value, get_property
from .frontmatter import Frontmatter, FrontmatterError, ParsedMarkdown, parse_frontmatter, render_frontmatter
from .writer import Post, PostWriter, assign_filenames, generate_slug, parse_post_date, sanitize_slug

__all__ = [
    "markdown_to_blocks",
    "blocks_to_markdown",
    "extract_property_value",
    "get_property",
    "Frontmatter",
    "FrontmatterError",
    "ParsedMarkdown",
    "parse_frontmatter",
    "render_frontmatter",
    "Post",
    "PostWriter",
    "assign_filenames",
    "generate_slug",
    "parse_post_date",
    "sanitize_slug",
]
