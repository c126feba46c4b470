# ABOUTME: Reads typed values off Notion page properties.
# ABOUTME: Title, custom output path, ordering weight and front-matter projections.

from typing import Any

UNTITLED = "untitled"


def _first_plain_text(rich_text: list[dict] | None) -> str:
    if not rich_text:
        return ""
    return rich_text[0].get("plain_text") or ""


def _named_property(page: dict, *names: str) -> dict | None:
    """Return the first property present under one of ``names``."""
    props = page.get("properties") or {}
    for name in names:
        prop = props.get(name)
        if prop:
            return prop
    return None


def extract_title(page: dict) -> str:
    """Extract the page title from its title-type property."""
    props = page.get("properties") or {}
    for prop in props.values():
        if prop and prop.get("type") == "title":
            return _first_plain_text(prop.get("title")) or UNTITLED
    return UNTITLED


def extract_custom_path(page: dict) -> str | None:
    """Return the ``path``/``Path`` rich-text property, or None when unset."""
    prop = _named_property(page, "path", "Path")
    if not prop or prop.get("type") != "rich_text":
        return None
    return _first_plain_text(prop.get("rich_text")) or None


def extract_weight(page: dict) -> int | float:
    """Return the ``weight``/``Weight`` number property, defaulting to 0."""
    prop = _named_property(page, "weight", "Weight")
    if not prop or prop.get("type") != "number" or prop.get("number") is None:
        return 0
    return prop["number"]


def _user_id(user: dict | None) -> str:
    return (user or {}).get("id") or ""


def property_to_value(prop: dict) -> Any:
    """Project a Notion property onto a scalar or list for front-matter."""
    prop_type = prop.get("type")

    if prop_type == "title":
        return _first_plain_text(prop.get("title"))
    if prop_type == "rich_text":
        return _first_plain_text(prop.get("rich_text"))
    if prop_type == "number":
        return prop.get("number")
    if prop_type in ("select", "status"):
        option = prop.get(prop_type)
        return option.get("name", "") if option else ""
    if prop_type == "multi_select":
        return [option.get("name") for option in prop.get("multi_select") or []]
    if prop_type == "date":
        date = prop.get("date")
        return (date.get("start") or "") if date else ""
    if prop_type == "checkbox":
        return prop.get("checkbox")
    if prop_type in ("url", "email", "phone_number"):
        return prop.get(prop_type) or ""
    if prop_type == "formula":
        formula = prop.get("formula") or {}
        if formula.get("string"):
            return formula["string"]
        if formula.get("number") is not None:
            return formula["number"]
        return ""
    if prop_type == "relation":
        return [relation.get("id") for relation in prop.get("relation") or []]
    if prop_type == "rollup":
        return (prop.get("rollup") or {}).get("array") or []
    if prop_type in ("created_time", "last_edited_time"):
        return prop.get(prop_type)
    if prop_type in ("created_by", "last_edited_by"):
        return _user_id(prop.get(prop_type))
    if prop_type == "people":
        return [_user_id(person) for person in prop.get("people") or []]

    return ""
