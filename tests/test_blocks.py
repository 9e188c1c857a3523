# ABOUTME: Tests for Markdown to Notion block conversion.
# ABOUTME: Covers headings, lists, quotes, code fences and raw inline markup.

from notion_blog_sync.markdown import markdown_to_blocks


def text_of(block):
    data = block[block["type"]]
    return "".join(rt["text"]["content"] for rt in data["rich_text"])


def test_heading_levels():
    blocks = markdown_to_blocks("# One\n## Two\n### Three")

    assert [b["type"] for b in blocks] == ["heading_1", "heading_2", "heading_3"]
    assert [text_of(b) for b in blocks] == ["One", "Two", "Three"]


def test_single_heading_2():
    blocks = markdown_to_blocks("## Section")

    assert len(blocks) == 1
    assert blocks[0]["object"] == "block"
    assert blocks[0]["type"] == "heading_2"
    assert text_of(blocks[0]) == "Section"


def test_fenced_code_with_language():
    blocks = markdown_to_blocks("```js\ncode\n```")

    assert len(blocks) == 1
    assert blocks[0]["type"] == "code"
    assert blocks[0]["code"]["language"] == "js"
    assert text_of(blocks[0]) == "code"


def test_code_keeps_lines_verbatim():
    md = "```python\ndef f():\n\n    return 1\n# not a heading\n```\nafter"
    blocks = markdown_to_blocks(md)

    assert [b["type"] for b in blocks] == ["code", "paragraph"]
    assert text_of(blocks[0]) == "def f():\n\n    return 1\n# not a heading"
    assert text_of(blocks[1]) == "after"


def test_code_without_language_is_plain_text():
    blocks = markdown_to_blocks("```\nx = 1\n```")
    assert blocks[0]["code"]["language"] == "plain text"


def test_unterminated_fence_consumes_rest():
    blocks = markdown_to_blocks("intro\n```sh\necho 1\necho 2")

    assert [b["type"] for b in blocks] == ["paragraph", "code"]
    assert text_of(blocks[1]) == "echo 1\necho 2"


def test_lists_and_quotes():
    md = "- dash\n* star\n1. first\n12.  twelfth\n> quoted"
    blocks = markdown_to_blocks(md)

    assert [b["type"] for b in blocks] == [
        "bulleted_list_item",
        "bulleted_list_item",
        "numbered_list_item",
        "numbered_list_item",
        "quote",
    ]
    assert [text_of(b) for b in blocks] == ["dash", "star", "first", "twelfth", "quoted"]


def test_paragraph_lines_are_not_merged():
    blocks = markdown_to_blocks("line one\nline two\n\n   \nline three")

    assert [b["type"] for b in blocks] == ["paragraph"] * 3
    assert [text_of(b) for b in blocks] == ["line one", "line two", "line three"]


def test_inline_markup_is_kept_raw():
    blocks = markdown_to_blocks("Some **bold** and [a link](http://x)")
    assert text_of(blocks[0]) == "Some **bold** and [a link](http://x)"


def test_prefixes_require_trailing_space():
    blocks = markdown_to_blocks("#hashtag\n-dash\n>arrow\n1.no-space")
    assert [b["type"] for b in blocks] == ["paragraph"] * 4


def test_empty_input():
    assert markdown_to_blocks("") == []
