# ABOUTME: Renders Notion block trees to Markdown.
# ABOUTME: Built-in rendering per block type, overridable per type with render hooks.

import hashlib
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

# (block, renderer, indent) -> markdown; returning None falls back to default rendering
RenderHook = Callable[[dict, "BlockRenderer", int], "str | None"]


def _compact_id(page_id: str) -> str:
    return page_id.replace("-", "")


def rich_text_to_markdown(rich_text: list[dict]) -> str:
    """Convert a Notion rich_text array to Markdown with inline formatting."""
    result = []
    for segment in rich_text:
        text = segment.get("plain_text", "")
        annotations = segment.get("annotations", {})

        if annotations.get("code"):
            text = f"`{text}`"
        if annotations.get("bold"):
            text = f"**{text}**"
        if annotations.get("italic"):
            text = f"*{text}*"
        if annotations.get("strikethrough"):
            text = f"~~{text}~~"

        mention = segment.get("mention") or {}
        if segment.get("type") == "mention" and mention.get("type") == "page":
            # Page mentions become internal links so they can be resolved later
            text = f"[{text}](/{_compact_id(mention['page']['id'])})"
        elif segment.get("href"):
            text = f"[{text}]({segment['href']})"

        result.append(text)

    return "".join(result)


def plain_text(rich_text: list[dict]) -> str:
    """Concatenate the plain text of a rich_text array without formatting."""
    return "".join(segment.get("plain_text", "") for segment in rich_text)


def _url_to_filename(url: str, block_id: str) -> str:
    """Generate a stable local filename for a Notion-hosted file."""
    parsed = urlparse(url)
    original_name = Path(unquote(parsed.path)).name

    if not original_name or original_name == "/":
        original_name = "file"

    short_hash = hashlib.sha256(f"{block_id}:{url}".encode()).hexdigest()[:8]
    return f"{short_hash}-{original_name}"


class BlockRenderer:
    """Converts Notion blocks to Markdown.

    Render hooks are fixed at construction: a mapping from block type to a
    callable that receives the block, this renderer and the indentation level.
    Hooks may call ``render_default`` or ``render`` to reuse built-in output.
    """

    def __init__(self, renderers: Mapping[str, RenderHook] | None = None, files_path: str = "files"):
        self._renderers = MappingProxyType(dict(renderers or {}))
        self.files_path = files_path

    @property
    def renderers(self) -> Mapping[str, RenderHook]:
        return self._renderers

    def render(self, blocks: list[dict], indent: int = 0) -> str:
        """Convert a list of Notion blocks to Markdown."""
        result = []
        for block in blocks:
            md = self.render_block(block, indent)
            if md:
                result.append(md)

        return "\n".join(result)

    def render_block(self, block: dict, indent: int = 0) -> str:
        """Convert a single block, preferring a registered hook."""
        hook = self._renderers.get(block.get("type", ""))
        if hook is not None:
            md = hook(block, self, indent)
            if md is not None:
                return md
        return self.render_default(block, indent)

    def _children(self, block: dict, indent: int) -> str:
        if "children" in block:
            return self.render(block["children"], indent)
        return ""

    def render_default(self, block: dict, indent: int = 0) -> str:
        """Built-in Markdown for a single block."""
        block_type = block.get("type", "")
        block_data = block.get(block_type, {})
        prefix = "  " * indent

        if block_type == "paragraph":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            return f"{prefix}{text}\n" + self._children(block, indent + 1)

        if block_type in ("heading_1", "heading_2", "heading_3"):
            level = int(block_type[-1])
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            return f"{prefix}{'#' * level} {text}\n"

        if block_type == "bulleted_list_item":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            return f"{prefix}- {text}\n" + self._children(block, indent + 1)

        if block_type == "numbered_list_item":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            return f"{prefix}1. {text}\n" + self._children(block, indent + 1)

        if block_type == "to_do":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            checkbox = "[x]" if block_data.get("checked", False) else "[ ]"
            return f"{prefix}- {checkbox} {text}\n" + self._children(block, indent + 1)

        if block_type == "toggle":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            result = f"{prefix}<details>\n{prefix}<summary>{text}</summary>\n\n"
            result += self._children(block, indent)
            return result + f"{prefix}</details>\n"

        if block_type == "quote":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            result = "\n".join(f"{prefix}> {line}" for line in text.split("\n")) + "\n"
            return result + self._children(block, indent + 1)

        if block_type == "callout":
            text = rich_text_to_markdown(block_data.get("rich_text", []))
            icon = block_data.get("icon") or {}
            emoji = icon.get("emoji", "💡") if icon.get("type") == "emoji" else "💡"
            return f"{prefix}> {emoji} {text}\n" + self._children(block, indent + 1)

        if block_type == "code":
            text = plain_text(block_data.get("rich_text", []))
            language = block_data.get("language", "")
            return f"{prefix}```{language}\n{text}\n{prefix}```\n"

        if block_type == "divider":
            return f"{prefix}---\n"

        if block_type == "image":
            caption = rich_text_to_markdown(block_data.get("caption", []))
            alt_text = caption or "image"
            if "file" in block_data:
                filename = _url_to_filename(block_data["file"].get("url", ""), block.get("id", ""))
                return f"{prefix}![{alt_text}]({self.files_path}/{filename})\n"
            if "external" in block_data:
                return f"{prefix}![{alt_text}]({block_data['external'].get('url', '')})\n"
            return f"{prefix}![{alt_text}](missing-image)\n"

        if block_type in ("file", "pdf", "video", "audio"):
            caption = rich_text_to_markdown(block_data.get("caption", []))
            name = caption or block_data.get("name") or block_type
            if "file" in block_data:
                filename = _url_to_filename(block_data["file"].get("url", ""), block.get("id", ""))
                return f"{prefix}[{name}]({self.files_path}/{filename})\n"
            if "external" in block_data:
                return f"{prefix}[{name}]({block_data['external'].get('url', '')})\n"
            return f"{prefix}[{name}](missing-file)\n"

        if block_type == "bookmark":
            url = block_data.get("url", "")
            caption = rich_text_to_markdown(block_data.get("caption", []))
            return f"{prefix}[{caption or url}]({url})\n"

        if block_type == "table":
            rows = [row for row in block.get("children", []) if row.get("type") == "table_row"]
            if not rows:
                return ""

            lines = []
            for i, row in enumerate(rows):
                cells = row["table_row"].get("cells", [])
                lines.append(f"{prefix}| " + " | ".join(rich_text_to_markdown(cell) for cell in cells) + " |")
                if i == 0:
                    lines.append(f"{prefix}|" + "|".join(["---"] * len(cells)) + "|")
            return "\n".join(lines) + "\n"

        if block_type in ("column_list", "column", "synced_block"):
            return self._children(block, indent)

        if block_type == "equation":
            return f"{prefix}$$\n{block_data.get('expression', '')}\n$$\n"

        if block_type in ("link_preview", "embed"):
            url = block_data.get("url", "")
            return f"{prefix}[{url}]({url})\n"

        if block_type == "child_page":
            title = block_data.get("title", "Untitled")
            return f"{prefix}[{title}](/{_compact_id(block.get('id', ''))})\n"

        if block_type == "child_database":
            title = block_data.get("title", "Untitled Database")
            return f"{prefix}🗃️ {title}\n"

        if block_type == "link_to_page":
            target = block_data.get("page_id") or block_data.get("database_id")
            if not target:
                return ""
            return f"{prefix}[{target}](/{_compact_id(target)})\n"

        if block_type == "table_of_contents":
            return f"{prefix}[Table of Contents]\n"

        if block_type == "breadcrumb":
            return ""

        logger.debug(f"No renderer for block type '{block_type}'")
        return f"{prefix}<!-- Unsupported block type: {block_type} -->\n"
