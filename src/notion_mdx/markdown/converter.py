# ABOUTME: Converts a single Notion page into a Markdown document.
# ABOUTME: Fetches metadata and blocks, renders, resolves links and picks the output path.

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from notion_client.helpers import is_full_page

from ..notion.tree import fetch_block_tree
from .blocks import BlockRenderer, RenderHook
from .links import LinkResolver
from .properties import extract_custom_path, extract_title, extract_weight

logger = logging.getLogger(__name__)

_QUOTES = str.maketrans({
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
})


class ConversionError(Exception):
    """Raised when a page cannot be converted."""
    pass


@dataclass
class ResolvedDocument:
    """A converted page, ready to be written."""
    page_id: str
    title: str
    body: str
    created_at: str
    last_edited_at: str
    weight: int | float
    output_path: Path
    properties: dict[str, Any] = field(default_factory=dict)


def normalize_quotes(text: str) -> str:
    """Replace curly quotation marks with straight ones."""
    return text.translate(_QUOTES)


def slugify(title: str) -> str:
    """Lower-case a title and collapse each run of non-alphanumerics to a hyphen."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower())


def output_path_for(page: dict, output_dir: Path, title: str, extension: str = ".mdx") -> Path:
    """Compute where a page is written.

    A ``path`` property like ``guides/intro`` maps to ``<output_dir>/guides/intro<ext>``;
    without one the slugified title is used directly under ``output_dir``.

    Raises:
        ConversionError: If the ``path`` property climbs out of ``output_dir``.
    """
    custom_path = extract_custom_path(page)
    if custom_path:
        parts = [part for part in custom_path.replace("\\", "/").split("/") if part and part != "."]
        if ".." in parts:
            raise ConversionError(f"Custom path escapes the output directory: {custom_path}")
        if parts:
            return output_dir.joinpath(*parts[:-1]) / f"{parts[-1]}{extension}"

    return output_dir / f"{slugify(title)}{extension}"


class DocumentConverter:
    """Turns page IDs into ResolvedDocuments.

    The link cache lives as long as the converter, so one converter should be
    used per export run.
    """

    def __init__(
        self,
        client,
        renderers: Mapping[str, RenderHook] | None = None,
        base_path: str = "",
        extension: str = ".mdx",
    ):
        """Initialize the converter.

        Args:
            client: Object providing ``get_page`` and ``get_blocks``.
            renderers: Render hooks by block type.
            base_path: Prefix for resolved internal links.
            extension: Output file suffix.
        """
        self._client = client
        self.renderer = BlockRenderer(renderers)
        self.link_resolver = LinkResolver(client, base_path)
        self.extension = extension

    def render_markdown(self, page_id: str) -> str:
        """Render a page's blocks and resolve its internal links."""
        blocks = fetch_block_tree(self._client, page_id)
        markdown = self.renderer.render(blocks)
        markdown = self.link_resolver.resolve_links(markdown)
        return normalize_quotes(markdown)

    def convert(self, page_id: str, output_dir: Path) -> ResolvedDocument:
        """Convert one page.

        Raises:
            ConversionError: If the API returned a partial page object.
        """
        page = self._client.get_page(page_id)
        if not is_full_page(page):
            raise ConversionError("Retrieved incomplete page object")

        title = extract_title(page)
        body = self.render_markdown(page_id)
        output_path = output_path_for(page, Path(output_dir), title, self.extension)
        logger.debug(f"Converted '{title}' ({page_id}) -> {output_path}")

        return ResolvedDocument(
            page_id=page_id,
            title=title,
            body=body,
            created_at=page.get("created_time", ""),
            last_edited_at=page.get("last_edited_time", ""),
            weight=extract_weight(page),
            output_path=output_path,
            properties=page.get("properties") or {},
        )
