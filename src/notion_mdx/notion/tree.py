# ABOUTME: Block tree retrieval for Markdown rendering and raw JSON snapshots.
# ABOUTME: Nested blocks are attached under each parent's "children" key.

import logging

logger = logging.getLogger(__name__)

# Block kinds whose nested content the Markdown renderer draws
RENDERED_CONTAINERS = frozenset({
    "paragraph",
    "bulleted_list_item",
    "numbered_list_item",
    "to_do",
    "toggle",
    "quote",
    "callout",
    "table",
    "column_list",
    "column",
    "synced_block",
})

# Children of these are another document's content
SEPARATE_DOCUMENTS = frozenset({"child_page", "child_database"})


def _descend_into(block: dict, full: bool) -> bool:
    if not block.get("has_children"):
        return False
    block_type = block.get("type")
    if full:
        return block_type not in SEPARATE_DOCUMENTS
    return block_type in RENDERED_CONTAINERS


def fetch_block_tree(client, block_id: str, full: bool = False) -> list[dict]:
    """Fetch the blocks under a parent along with their nested blocks.

    Args:
        client: Object providing ``get_blocks``.
        block_id: The page or block whose children are fetched.
        full: Descend into every nesting block rather than only the kinds
            the renderer draws. Sub-pages and databases are never entered.

    Returns:
        The child blocks, each with a ``children`` list where one was fetched.
    """
    blocks = client.get_blocks(block_id)
    for block in blocks:
        if _descend_into(block, full):
            block["children"] = fetch_block_tree(client, block["id"], full)
    return blocks


def snapshot_page(client, page_id: str) -> dict:
    """Retrieve a page object and its complete block tree as plain JSON data."""
    logger.debug(f"Snapshotting page {page_id}")
    return {
        "page": client.get_page(page_id),
        "blocks": fetch_block_tree(client, page_id, full=True),
    }
