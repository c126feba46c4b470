# ABOUTME: YAML front-matter for exported documents.
# ABOUTME: Fixed metadata fields followed by every page property, flattened.

import yaml

from .converter import ResolvedDocument
from .properties import property_to_value


def frontmatter_fields(document: ResolvedDocument) -> dict:
    """Collect the front-matter mapping for a document, in output order."""
    metadata = {
        "title": document.title,
        "notionId": document.page_id,
        "createdAt": document.created_at,
        "lastEditedAt": document.last_edited_at,
        "weight": document.weight,
    }

    for name, prop in document.properties.items():
        if not prop:
            continue
        metadata[name] = property_to_value(prop)

    return metadata


def build_frontmatter(document: ResolvedDocument) -> str:
    """Generate YAML front-matter including delimiters and a trailing blank line."""
    yaml_str = yaml.dump(
        frontmatter_fields(document),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )

    return f"---\n{yaml_str}---\n\n"
