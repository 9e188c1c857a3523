# ABOUTME: Converts blog post Markdown into Notion block objects.
# ABOUTME: Handles headings, fenced code, lists, quotes and paragraphs; no inline formatting.

import re

NUMBERED_ITEM_RE = re.compile(r"^\d+\.\s+(.*)$")

FENCE = "```"
DEFAULT_CODE_LANGUAGE = "plain text"

# Checked in order, so "### " must come before "## " and "# "
HEADING_PREFIXES = [
    ("### ", "heading_3"),
    ("## ", "heading_2"),
    ("# ", "heading_1"),
]

BULLET_PREFIXES = ("- ", "* ")
QUOTE_PREFIX = "> "


def text_block(block_type: str, content: str, **extra) -> dict:
    """Build a Notion block carrying a single plain text run."""
    return {
        "object": "block",
        "type": block_type,
        block_type: {
            "rich_text": [{"type": "text", "text": {"content": content}}],
            **extra,
        },
    }


def markdown_to_blocks(markdown: str) -> list[dict]:
    """Convert Markdown text to a list of Notion blocks.

    Every non-blank line that isn't part of a code fence becomes its own
    block; consecutive paragraph lines are not merged.

    Args:
        markdown: Post body without frontmatter.

    Returns:
        Ordered list of Notion block dicts.
    """
    blocks = []
    lines = markdown.split("\n")

    i = 0
    while i < len(lines):
        line = lines[i]

        if line.strip() == "":
            i += 1
            continue

        heading = next(
            ((prefix, block_type) for prefix, block_type in HEADING_PREFIXES if line.startswith(prefix)),
            None,
        )
        if heading:
            prefix, block_type = heading
            blocks.append(text_block(block_type, line[len(prefix):]))
            i += 1
            continue

        if line.startswith(FENCE):
            language = line[len(FENCE):].strip() or DEFAULT_CODE_LANGUAGE
            code_lines = []
            i += 1
            while i < len(lines) and not lines[i].startswith(FENCE):
                code_lines.append(lines[i])
                i += 1
            i += 1  # closing fence
            blocks.append(text_block("code", "\n".join(code_lines), language=language))
            continue

        if line.startswith(BULLET_PREFIXES):
            blocks.append(text_block("bulleted_list_item", line[2:]))
            i += 1
            continue

        numbered = NUMBERED_ITEM_RE.match(line)
        if numbered:
            blocks.append(text_block("numbered_list_item", numbered.group(1)))
            i += 1
            continue

        if line.startswith(QUOTE_PREFIX):
            blocks.append(text_block("quote", line[len(QUOTE_PREFIX):]))
            i += 1
            continue

        blocks.append(text_block("paragraph", line))
        i += 1

    return blocks
