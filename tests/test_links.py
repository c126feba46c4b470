"""Tests for internal link resolution."""

import pytest

from notion_mdx.markdown.links import LinkResolver, normalize_page_id

ID_A = "3c5a0edb257449558cf968f5ded58812"
ID_B = "23f1324e5ecc4d32af0e81e60a03cf18"


@pytest.fixture
def linked_client(fake_client, make_page):
    fake_client.add_page(make_page(normalize_page_id(ID_A), title="A", path="guides/x"))
    fake_client.add_page(make_page(normalize_page_id(ID_B), title="B", path="guides/y"))
    return fake_client


class TestNormalizePageId:
    def test_compact_id(self):
        assert normalize_page_id(ID_A) == "3c5a0edb-2574-4955-8cf9-68f5ded58812"

    def test_already_hyphenated(self):
        assert normalize_page_id("3c5a0edb-2574-4955-8cf9-68f5ded58812") == "3c5a0edb-2574-4955-8cf9-68f5ded58812"


class TestResolveLinks:
    def test_rewrites_each_link(self, linked_client):
        resolver = LinkResolver(linked_client)
        markdown = f"See [A](/{ID_A}) and [B](/{ID_B})."

        assert resolver.resolve_links(markdown) == "See [A](/guides/x) and [B](/guides/y)."

    def test_hyphenated_target(self, linked_client):
        resolver = LinkResolver(linked_client)
        markdown = "[A](/3c5a0edb-2574-4955-8cf9-68f5ded58812)"

        assert resolver.resolve_links(markdown) == "[A](/guides/x)"

    def test_base_path_prefix(self, linked_client):
        resolver = LinkResolver(linked_client, base_path="docs")
        assert resolver.resolve_links(f"[A](/{ID_A})") == "[A](/docs/guides/x)"

    def test_base_path_slashes_are_not_doubled(self, linked_client):
        resolver = LinkResolver(linked_client, base_path="/docs/")
        assert resolver.resolve_links(f"[A](/{ID_A})") == "[A](/docs/guides/x)"

    def test_page_without_path_is_left_unchanged(self, fake_client, make_page):
        fake_client.add_page(make_page(normalize_page_id(ID_A), title="A"))
        markdown = f"[A](/{ID_A})"

        assert LinkResolver(fake_client).resolve_links(markdown) == markdown

    def test_fetch_error_leaves_link_unchanged(self, fake_client):
        fake_client.pages[normalize_page_id(ID_A)] = RuntimeError("boom")
        markdown = f"[A](/{ID_A}) text"

        assert LinkResolver(fake_client).resolve_links(markdown) == markdown

    def test_partial_page_leaves_link_unchanged(self, fake_client):
        fake_client.pages[normalize_page_id(ID_A)] = {"object": "page", "id": normalize_page_id(ID_A)}
        markdown = f"[A](/{ID_A})"

        assert LinkResolver(fake_client).resolve_links(markdown) == markdown

    def test_external_and_non_id_links_untouched(self, linked_client):
        markdown = "[site](https://example.com) [rel](/guides/intro) [short](/3c5a0edb)"

        assert LinkResolver(linked_client).resolve_links(markdown) == markdown
        assert linked_client.calls == []

    def test_uppercase_hex_is_not_an_internal_link(self, linked_client):
        markdown = f"[A](/{ID_A.upper()})"
        assert LinkResolver(linked_client).resolve_links(markdown) == markdown


class TestCaching:
    def test_same_target_fetched_once(self, linked_client):
        resolver = LinkResolver(linked_client)
        markdown = f"[A](/{ID_A}) [again](/{ID_A}) [hyphenated](/{normalize_page_id(ID_A)})"

        result = resolver.resolve_links(markdown)

        assert result == "[A](/guides/x) [again](/guides/x) [hyphenated](/guides/x)"
        assert linked_client.count("get_page") == 1

    def test_cache_persists_across_documents(self, linked_client):
        resolver = LinkResolver(linked_client)
        resolver.resolve_links(f"[A](/{ID_A})")
        resolver.resolve_links(f"[A](/{ID_A})")

        assert linked_client.count("get_page") == 1

    def test_negative_results_are_cached(self, fake_client, make_page):
        fake_client.add_page(make_page(normalize_page_id(ID_A), title="A"))
        resolver = LinkResolver(fake_client)

        resolver.resolve_links(f"[A](/{ID_A}) [A](/{ID_A})")

        assert fake_client.count("get_page") == 1
        assert resolver.cache == {normalize_page_id(ID_A): None}

    def test_failed_lookups_are_cached(self, fake_client):
        fake_client.pages[normalize_page_id(ID_A)] = RuntimeError("boom")
        resolver = LinkResolver(fake_client)

        assert resolver.resolve_page_path(ID_A) is None
        assert resolver.resolve_page_path(ID_A) is None
        assert fake_client.count("get_page") == 1

    def test_resolution_is_idempotent(self, linked_client):
        resolver = LinkResolver(linked_client)
        once = resolver.resolve_links(f"[A](/{ID_A})")

        assert resolver.resolve_links(once) == once
