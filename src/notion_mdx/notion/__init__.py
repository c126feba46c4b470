# ABOUTME: Notion API integration package.
# ABOUTME: Exports the client, block tree retrieval and raw fetching functions.

from .client import NotionClient, retry_on_rate_limit
from .raw import RawExportError, export_raw_json, fetch_raw_content
from .tree import fetch_block_tree, snapshot_page

__all__ = [
    "NotionClient",
    "retry_on_rate_limit",
    "fetch_block_tree",
    "snapshot_page",
    "RawExportError",
    "export_raw_json",
    "fetch_raw_content",
]
