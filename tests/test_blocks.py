"""Tests for block tree rendering."""

from notion_mdx.markdown.blocks import BlockRenderer, rich_text_to_markdown


def block(block_type: str, children=None, **data) -> dict:
    result = {"object": "block", "id": f"id-{block_type}", "type": block_type, block_type: data}
    if children is not None:
        result["has_children"] = True
        result["children"] = children
    return result


def text(value: str, **annotations) -> list[dict]:
    return [{"plain_text": value, "annotations": annotations}]


class TestRichText:
    def test_annotations(self):
        segments = [
            {"plain_text": "bold", "annotations": {"bold": True}},
            {"plain_text": " and ", "annotations": {}},
            {"plain_text": "code", "annotations": {"code": True}},
        ]
        assert rich_text_to_markdown(segments) == "**bold** and `code`"

    def test_links(self):
        segments = [{"plain_text": "docs", "href": "https://example.com"}]
        assert rich_text_to_markdown(segments) == "[docs](https://example.com)"

    def test_page_mention_becomes_internal_link(self):
        segments = [{
            "type": "mention",
            "plain_text": "Other page",
            "href": "https://www.notion.so/3c5a0edb257449558cf968f5ded58812",
            "mention": {"type": "page", "page": {"id": "3c5a0edb-2574-4955-8cf9-68f5ded58812"}},
        }]
        assert rich_text_to_markdown(segments) == "[Other page](/3c5a0edb257449558cf968f5ded58812)"


class TestBlockRenderer:
    def test_blocks_are_separated_by_blank_lines(self):
        renderer = BlockRenderer()
        blocks = [
            block("heading_1", rich_text=text("Title")),
            block("paragraph", rich_text=text("Body")),
        ]
        assert renderer.render(blocks) == "# Title\n\nBody\n"

    def test_nested_list(self):
        renderer = BlockRenderer()
        item = block(
            "bulleted_list_item",
            children=[block("bulleted_list_item", rich_text=text("child"))],
            rich_text=text("parent"),
        )
        assert renderer.render([item]) == "- parent\n  - child\n"

    def test_to_do_and_code(self):
        renderer = BlockRenderer()
        assert renderer.render_block(block("to_do", rich_text=text("done"), checked=True)) == "- [x] done\n"
        assert renderer.render_block(block("code", rich_text=text("x = 1"), language="python")) == "```python\nx = 1\n```\n"

    def test_table(self):
        renderer = BlockRenderer()
        rows = [
            block("table_row", cells=[text("a"), text("b")]),
            block("table_row", cells=[text("1"), text("2")]),
        ]
        assert renderer.render_block(block("table", children=rows)) == "| a | b |\n|---|---|\n| 1 | 2 |\n"

    def test_child_page_links_to_page_id(self):
        child = {"id": "3c5a0edb-2574-4955-8cf9-68f5ded58812", "type": "child_page", "child_page": {"title": "Sub"}}
        assert BlockRenderer().render_block(child) == "[Sub](/3c5a0edb257449558cf968f5ded58812)\n"

    def test_unknown_block_type(self):
        assert BlockRenderer().render_block(block("ai_block")) == "<!-- Unsupported block type: ai_block -->\n"

    def test_hook_overrides_block_type(self):
        renderer = BlockRenderer({"divider": lambda b, r, indent: "***\n"})
        assert renderer.render([block("divider")]) == "***\n"

    def test_hook_returning_none_falls_back(self):
        renderer = BlockRenderer({"divider": lambda b, r, indent: None})
        assert renderer.render([block("divider")]) == "---\n"

    def test_hooks_are_fixed_at_construction(self):
        hooks = {}
        renderer = BlockRenderer(hooks)
        hooks["divider"] = lambda b, r, indent: "***\n"

        assert renderer.render([block("divider")]) == "---\n"
        assert "divider" not in renderer.renderers
