"""Shared test fixtures for the notion-mdx test suite.

Design:
- FakeNotionClient stands in for NotionClient: in-memory pages, blocks and
  database rows, with every call recorded so tests can count fetches.
- Page and block factories build API-shaped dicts with only the fields the
  exporter reads.
"""

import copy
import itertools

import pytest


def page_id_for(n: int) -> str:
    """Deterministic hyphenated page ID for test page number ``n``."""
    raw = f"{n:032x}"
    return f"{raw[:8]}-{raw[8:12]}-{raw[12:16]}-{raw[16:20]}-{raw[20:]}"


def rich_text(text: str, href: str | None = None, **annotations) -> dict:
    return {
        "type": "text",
        "text": {"content": text, "link": {"url": href} if href else None},
        "plain_text": text,
        "href": href,
        "annotations": annotations,
    }


def build_page(
    page_id: str,
    title: str | None = "Test Page",
    path: str | None = None,
    weight: float | None = None,
    properties: dict | None = None,
) -> dict:
    """A full page object as returned by pages.retrieve / databases.query."""
    props = {}
    if title is not None:
        props["Name"] = {"id": "title", "type": "title", "title": [rich_text(title)] if title else []}
    if path is not None:
        props["path"] = {"id": "pth", "type": "rich_text", "rich_text": [rich_text(path)]}
    if weight is not None:
        props["weight"] = {"id": "wgt", "type": "number", "number": weight}
    props.update(properties or {})

    return {
        "object": "page",
        "id": page_id,
        "url": f"https://www.notion.so/{page_id.replace('-', '')}",
        "created_time": "2024-01-01T00:00:00.000Z",
        "last_edited_time": "2024-01-02T00:00:00.000Z",
        "properties": props,
    }


_block_ids = itertools.count(1)


def paragraph(text: str, href: str | None = None) -> dict:
    return {
        "object": "block",
        "id": f"block-{next(_block_ids)}",
        "type": "paragraph",
        "has_children": False,
        "paragraph": {"rich_text": [rich_text(text, href)]},
    }


class FakeNotionClient:
    """In-memory replacement for NotionClient.

    Values stored in ``pages``, ``blocks`` or ``collections`` may be exceptions,
    which are raised when that ID is requested.
    """

    def __init__(self, pages=None, blocks=None, collections=None):
        self.pages: dict[str, object] = dict(pages or {})
        self.blocks: dict[str, object] = dict(blocks or {})
        self.collections: dict[str, object] = dict(collections or {})
        self.calls: list[tuple[str, str]] = []

    def add_page(self, page: dict, blocks: list[dict] | None = None) -> dict:
        self.pages[page["id"]] = page
        self.blocks[page["id"]] = blocks or []
        return page

    def _lookup(self, store: dict, key: str, default=None):
        value = store.get(key, default)
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise KeyError(f"Could not find {key}")
        return copy.deepcopy(value)

    def query_collection(self, collection_id: str) -> list[dict]:
        self.calls.append(("query_collection", collection_id))
        return self._lookup(self.collections, collection_id)

    def get_page(self, page_id: str) -> dict:
        self.calls.append(("get_page", page_id))
        return self._lookup(self.pages, page_id)

    def get_blocks(self, block_id: str) -> list[dict]:
        self.calls.append(("get_blocks", block_id))
        return self._lookup(self.blocks, block_id, default=[])

    def count(self, method: str, key: str | None = None) -> int:
        return sum(1 for name, arg in self.calls if name == method and (key is None or arg == key))


@pytest.fixture
def fake_client():
    return FakeNotionClient()


@pytest.fixture
def make_page():
    return build_page


@pytest.fixture
def make_paragraph():
    return paragraph


@pytest.fixture
def make_rich_text():
    return rich_text


@pytest.fixture
def page_id():
    return page_id_for
