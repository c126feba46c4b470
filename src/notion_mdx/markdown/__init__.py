# ABOUTME: Markdown conversion package.
# ABOUTME: Exports block rendering, link resolution, page conversion and index generation.

from .blocks import BlockRenderer, RenderHook, rich_text_to_markdown
from .converter import ConversionError, DocumentConverter, ResolvedDocument
from .frontmatter import build_frontmatter
from .links import LinkResolver, normalize_page_id
from .meta import DirectoryIndexBuilder, META_FILENAME
from .properties import extract_custom_path, extract_title, extract_weight
from .transformers import HEXTRA_RENDERERS, site_url_renderers

__all__ = [
    "BlockRenderer",
    "RenderHook",
    "rich_text_to_markdown",
    "ConversionError",
    "DocumentConverter",
    "ResolvedDocument",
    "build_frontmatter",
    "LinkResolver",
    "normalize_page_id",
    "DirectoryIndexBuilder",
    "META_FILENAME",
    "extract_custom_path",
    "extract_title",
    "extract_weight",
    "HEXTRA_RENDERERS",
    "site_url_renderers",
]
