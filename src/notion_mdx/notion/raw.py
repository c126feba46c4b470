# ABOUTME: Raw JSON export of a Notion database or page.
# ABOUTME: Tries the ID as a database first and falls back to a page on object_not_found.

import json
import logging
from pathlib import Path

from notion_client.errors import APIErrorCode, APIResponseError

from .client import NotionClient
from .tree import snapshot_page

logger = logging.getLogger(__name__)


class RawExportError(Exception):
    """Raised when neither a database nor a page could be fetched."""
    pass


def _is_object_not_found(error: APIResponseError) -> bool:
    return getattr(error, "code", None) == APIErrorCode.ObjectNotFound or getattr(error, "status", None) == 404


def fetch_raw_content(client: NotionClient, content_id: str) -> dict:
    """Fetch the raw API content behind an ID.

    The ID is first queried as a database. A not-found answer only means the ID
    names a page instead, so the page and its block tree are fetched.

    Returns:
        ``{"results": [...]}`` for a database, ``{"page": ..., "blocks": [...]}``
        for a page.

    Raises:
        RawExportError: If the content could not be fetched either way.
    """
    try:
        try:
            rows = client.query_collection(content_id)
            return {"results": rows}
        except APIResponseError as e:
            if not _is_object_not_found(e):
                raise
            logger.debug(f"{content_id} is not a database, fetching it as a page")
            return snapshot_page(client, content_id)
    except Exception as e:
        raise RawExportError(f"Failed to fetch Notion content: {e}") from e


def export_raw_json(client: NotionClient, content_id: str, output: Path | None = None) -> str:
    """Serialize the raw content behind an ID, optionally writing it to a file."""
    content = json.dumps(fetch_raw_content(client, content_id), indent=2, ensure_ascii=False, default=str)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Wrote raw JSON: {output}")

    return content
