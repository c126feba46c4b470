# ABOUTME: notion-mdx exports Notion database pages to Markdown/MDX documents.
# ABOUTME: Package version lives here.

__version__ = "0.3.0"
