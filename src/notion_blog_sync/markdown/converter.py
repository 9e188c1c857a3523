# ABOUTME: Converts Notion blocks and page properties to Markdown and plain values.
# ABOUTME: Used by the pull side to render fetched pages as blog post bodies.

from typing import Any


def get_rich_text(rich_text: list[dict]) -> str:
    """Extract text from Notion rich_text array with formatting."""
    result = []
    for segment in rich_text:
        text = segment.get("plain_text", "")
        annotations = segment.get("annotations", {})

        # Apply formatting
        if annotations.get("code"):
            text = f"`{text}`"
        if annotations.get("bold"):
            text = f"**{text}**"
        if annotations.get("italic"):
            text = f"*{text}*"
        if annotations.get("strikethrough"):
            text = f"~~{text}~~"

        # Handle links
        if segment.get("href"):
            text = f"[{text}]({segment['href']})"

        result.append(text)

    return "".join(result)


def get_plain_text(rich_text: list[dict]) -> str:
    """Concatenate the plain text of a rich_text array, ignoring annotations."""
    return "".join(segment.get("plain_text", "") for segment in rich_text)


def _media_url(block_data: dict) -> str:
    for source in ("file", "external"):
        if source in block_data:
            return block_data[source].get("url", "")
    return ""


def block_to_markdown(block: dict, indent: int = 0, number: int = 1) -> str:
    """Convert a single Notion block to Markdown.

    Args:
        block: Notion block dict, with nested blocks under "children".
        indent: Indentation level for nested content.
        number: Position of a numbered list item within its list.

    Returns:
        Markdown string.
    """
    block_type = block.get("type", "")
    block_data = block.get(block_type, {})
    prefix = "  " * indent

    if block_type == "paragraph":
        text = get_rich_text(block_data.get("rich_text", []))
        return f"{prefix}{text}\n"

    if block_type in ("heading_1", "heading_2", "heading_3"):
        text = get_rich_text(block_data.get("rich_text", []))
        return f"{prefix}{'#' * int(block_type[-1])} {text}\n"

    # Lists
    if block_type == "bulleted_list_item":
        text = get_rich_text(block_data.get("rich_text", []))
        result = f"{prefix}- {text}\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent + 1)
        return result

    if block_type == "numbered_list_item":
        text = get_rich_text(block_data.get("rich_text", []))
        result = f"{prefix}{number}. {text}\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent + 1)
        return result

    if block_type == "to_do":
        text = get_rich_text(block_data.get("rich_text", []))
        checkbox = "[x]" if block_data.get("checked", False) else "[ ]"
        result = f"{prefix}- {checkbox} {text}\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent + 1)
        return result

    if block_type == "toggle":
        text = get_rich_text(block_data.get("rich_text", []))
        result = f"{prefix}<details>\n{prefix}<summary>{text}</summary>\n\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent)
        result += f"{prefix}</details>\n"
        return result

    if block_type == "quote":
        text = get_rich_text(block_data.get("rich_text", []))
        result = "\n".join(f"{prefix}> {line}" for line in text.split("\n")) + "\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent + 1)
        return result

    if block_type == "callout":
        text = get_rich_text(block_data.get("rich_text", []))
        icon = block_data.get("icon") or {}
        emoji = icon.get("emoji", "💡") if icon.get("type") == "emoji" else "💡"
        result = f"{prefix}> {emoji} {text}\n"
        if "children" in block:
            result += blocks_to_markdown(block["children"], indent + 1)
        return result

    # Code keeps its text verbatim
    if block_type == "code":
        text = get_plain_text(block_data.get("rich_text", []))
        language = block_data.get("language", "")
        if language == "plain text":
            language = ""
        return f"{prefix}```{language}\n{text}\n{prefix}```\n"

    if block_type == "divider":
        return f"{prefix}---\n"

    if block_type == "image":
        caption = get_plain_text(block_data.get("caption", []))
        url = _media_url(block_data) or "missing-image"
        return f"{prefix}![{caption}]({url})\n"

    if block_type in ("file", "pdf", "video", "audio"):
        caption = get_plain_text(block_data.get("caption", []))
        name = caption or block_data.get("name") or block_type
        url = _media_url(block_data) or "missing-file"
        return f"{prefix}[{name}]({url})\n"

    if block_type == "bookmark":
        url = block_data.get("url", "")
        title = get_plain_text(block_data.get("caption", [])) or url
        return f"{prefix}[{title}]({url})\n"

    if block_type == "table":
        rows = [row for row in block.get("children", []) if row.get("type") == "table_row"]
        if not rows:
            return ""

        result = []
        for i, row in enumerate(rows):
            cells = row.get("table_row", {}).get("cells", [])
            result.append(f"{prefix}| " + " | ".join(get_rich_text(cell) for cell in cells) + " |")
            if i == 0:
                result.append(f"{prefix}|" + "|".join(["---"] * len(cells)) + "|")
        return "\n".join(result) + "\n"

    # Containers render their children in place
    if block_type in ("column_list", "column", "synced_block"):
        if "children" in block:
            return blocks_to_markdown(block["children"], indent)
        return ""

    if block_type == "equation":
        return f"{prefix}$$\n{block_data.get('expression', '')}\n$$\n"

    if block_type in ("link_preview", "embed"):
        url = block_data.get("url", "")
        return f"{prefix}[{url}]({url})\n"

    if block_type == "child_page":
        return f"{prefix}📄 {block_data.get('title', 'Untitled')}\n"

    if block_type == "child_database":
        return f"{prefix}🗃️ {block_data.get('title', 'Untitled Database')}\n"

    if block_type in ("breadcrumb", "table_of_contents"):
        return ""

    return f"{prefix}<!-- Unsupported block type: {block_type} -->\n"


def blocks_to_markdown(blocks: list[dict], indent: int = 0) -> str:
    """Convert a list of Notion blocks to Markdown.

    Args:
        blocks: List of Notion block dicts.
        indent: Base indentation level.

    Returns:
        Markdown string.
    """
    result = []
    number = 0
    for block in blocks:
        number = number + 1 if block.get("type") == "numbered_list_item" else 0
        md = block_to_markdown(block, indent, number or 1)
        if md:
            result.append(md)

    return "\n".join(result)


def extract_property_value(prop: dict | None) -> Any:
    """Extract a simple value from a Notion property."""
    if not prop:
        return None
    prop_type = prop.get("type")

    if prop_type == "title":
        return get_plain_text(prop.get("title", []))
    if prop_type == "rich_text":
        return get_plain_text(prop.get("rich_text", []))
    if prop_type == "number":
        return prop.get("number")
    if prop_type == "select":
        select = prop.get("select")
        return select.get("name") if select else None
    if prop_type == "multi_select":
        return [s.get("name") for s in prop.get("multi_select", [])]
    if prop_type == "date":
        date = prop.get("date")
        return date.get("start") if date else None
    if prop_type == "checkbox":
        return prop.get("checkbox")
    if prop_type == "url":
        return prop.get("url")
    if prop_type == "status":
        status = prop.get("status")
        return status.get("name") if status else None
    if prop_type == "created_time":
        return prop.get("created_time")
    if prop_type == "last_edited_time":
        return prop.get("last_edited_time")

    return None


def get_property(page: dict, name: str) -> Any:
    """Look up a page property by name and return its simple value."""
    return extract_property_value(page.get("properties", {}).get(name))
