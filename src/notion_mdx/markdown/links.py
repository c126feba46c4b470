# ABOUTME: Rewrites internal Notion page links to exported document paths.
# ABOUTME: Looks up each linked page's custom path once and caches the answer.

import logging
import re

from notion_client.helpers import is_full_page

from .properties import extract_custom_path

logger = logging.getLogger(__name__)

# [text](/<page id>) with a 32-hex id, optionally hyphenated 8-4-4-4-12
INTERNAL_LINK_PATTERN = re.compile(
    r"\[([^\]]+)\]\(/("
    r"[0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}"
    r")\)"
)


def normalize_page_id(page_id: str) -> str:
    """Return the canonical hyphenated form of a page ID."""
    clean = page_id.replace("-", "")
    return f"{clean[:8]}-{clean[8:12]}-{clean[12:16]}-{clean[16:20]}-{clean[20:]}"


class LinkResolver:
    """Resolves ``[text](/<page id>)`` links against page ``path`` properties.

    The cache maps normalized page IDs to the resolved path, or to None when the
    page has no custom path (or could not be fetched). A missing key means the
    page has not been looked up yet. One resolver belongs to one export run.
    """

    def __init__(self, client, base_path: str = ""):
        """Initialize the resolver.

        Args:
            client: Object providing ``get_page(page_id)``.
            base_path: Optional prefix for rewritten links (e.g. ``docs``).
        """
        self._client = client
        self.base_path = base_path
        self._cache: dict[str, str | None] = {}

    @property
    def cache(self) -> dict[str, str | None]:
        return self._cache

    def resolve_page_path(self, page_id: str) -> str | None:
        """Return the custom path of a linked page, fetching it at most once."""
        formatted_id = normalize_page_id(page_id)
        if formatted_id in self._cache:
            return self._cache[formatted_id]

        path = None
        try:
            page = self._client.get_page(formatted_id)
            if is_full_page(page):
                path = extract_custom_path(page)
            else:
                logger.debug(f"Linked page {formatted_id} is not a full page object")
        except Exception as e:
            logger.warning(f"Failed to fetch path for page {formatted_id}: {e}")

        self._cache[formatted_id] = path
        return path

    def _link_target(self, path: str) -> str:
        prefix = f"/{self.base_path.strip('/')}" if self.base_path.strip("/") else ""
        return f"{prefix}/{path.lstrip('/')}"

    def resolve_links(self, markdown: str) -> str:
        """Rewrite every resolvable internal link; leave the rest untouched."""
        def replace(match: re.Match) -> str:
            link_text, page_id = match.groups()
            path = self.resolve_page_path(page_id)
            if not path:
                return match.group(0)
            return f"[{link_text}]({self._link_target(path)})"

        return INTERNAL_LINK_PATTERN.sub(replace, markdown)
