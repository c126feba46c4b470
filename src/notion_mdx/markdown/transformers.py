# ABOUTME: Render hooks for target-specific Markdown output.
# ABOUTME: Hextra callout shortcodes and site URL rewriting for paragraph links.

import copy

from .blocks import BlockRenderer, RenderHook, plain_text

DEFAULT_CALLOUT_EMOJI = "📄"

# Notion color -> Hextra callout type; anything not listed is "info"
CALLOUT_TYPES = {
    "red": "error",
    "red_background": "error",
    "orange": "warning",
    "orange_background": "warning",
    "default": "info",
    "blue": "info",
    "blue_background": "info",
    "green": "info",
    "green_background": "info",
    "yellow": "info",
    "yellow_background": "info",
    "pink": "info",
    "pink_background": "info",
    "purple": "info",
    "purple_background": "info",
    "brown": "info",
    "brown_background": "info",
    "gray": "info",
    "gray_background": "info",
}


def callout_shortcode(block: dict, renderer: BlockRenderer, indent: int) -> str:
    """Render a callout block as a Hextra ``callout`` shortcode."""
    callout = block.get("callout", {})
    icon = callout.get("icon") or {}
    emoji = icon.get("emoji") or DEFAULT_CALLOUT_EMOJI
    callout_type = CALLOUT_TYPES.get(callout.get("color", "default"), "info")
    content = plain_text(callout.get("rich_text", []))

    return f'{{{{< callout type="{callout_type}" emoji="{emoji}" >}}}}\n{content}\n{{{{< /callout >}}}}'


HEXTRA_RENDERERS: dict[str, RenderHook] = {
    "callout": callout_shortcode,
}


def site_url_renderers(site_url: str) -> dict[str, RenderHook]:
    """Build a paragraph hook that turns absolute links into site-relative ones.

    Links equal to ``site_url`` become ``/``; links under it lose the prefix.
    """
    if not site_url:
        return {}

    def relative_links(block: dict, renderer: BlockRenderer, indent: int) -> str | None:
        rich_text = block.get("paragraph", {}).get("rich_text")
        if not rich_text:
            return None

        block = copy.deepcopy(block)
        for segment in block["paragraph"]["rich_text"]:
            href = segment.get("href")
            if not href or not href.startswith(site_url):
                continue
            relative = "/" if href == site_url else href[len(site_url):]
            segment["href"] = relative
            if segment.get("text", {}).get("link"):
                segment["text"]["link"]["url"] = relative

        return renderer.render_default(block, indent)

    return {"paragraph": relative_links}
