# ABOUTME: Exports every page of a Notion database to Markdown files.
# ABOUTME: Yields progress events as each page, index file and snapshot is written.

import logging
from pathlib import Path
from typing import Iterator, Mapping

from notion_client.helpers import is_full_page

from ..config import ExportOptions
from ..markdown.blocks import RenderHook
from ..markdown.converter import DocumentConverter, ResolvedDocument
from ..markdown.frontmatter import build_frontmatter
from ..markdown.meta import DirectoryIndexBuilder
from ..notion.tree import snapshot_page
from .progress import (
    CompleteEvent,
    ExportProgress,
    IndexEmittedEvent,
    PageEvent,
    RawJsonEmittedEvent,
    StartEvent,
)
from .storage import ExportStorage

logger = logging.getLogger(__name__)


def build_document(document: ResolvedDocument, no_frontmatter: bool = False) -> str:
    """File contents for a converted page."""
    if no_frontmatter:
        return document.body
    return build_frontmatter(document) + document.body


def _error_message(error: Exception) -> str:
    return str(error) or error.__class__.__name__


class MarkdownExporter:
    """Exports a Notion database, one page at a time.

    Pages are processed sequentially in the order the database query returns
    them. A page that fails is reported and skipped; the rest of the run goes on.
    """

    def __init__(self, client, renderers: Mapping[str, RenderHook] | None = None):
        """Initialize the exporter.

        Args:
            client: Object providing ``query_collection``, ``get_page`` and ``get_blocks``.
            renderers: Render hooks by block type, passed to the converter.
        """
        self._client = client
        self._renderers = dict(renderers or {})

    def export(
        self,
        collection_id: str,
        output_dir: Path,
        options: ExportOptions | None = None,
    ) -> Iterator[ExportProgress]:
        """Export a database, yielding progress as it happens.

        Errors creating the output directory or querying the database propagate
        before any event is produced.
        """
        options = options or ExportOptions()
        storage = ExportStorage(Path(output_dir))
        converter = DocumentConverter(
            self._client,
            renderers=self._renderers,
            base_path=options.base_path,
            extension=options.extension,
        )
        index = DirectoryIndexBuilder()

        storage.create_directories()
        pages = self._client.query_collection(collection_id)
        total_pages = len(pages)
        logger.info(f"Found {total_pages} pages in database {collection_id}")

        yield StartEvent(total_pages=total_pages)

        for current_page, page in enumerate(pages, start=1):
            page_id = page.get("id", "")
            try:
                if not is_full_page(page):
                    raise ValueError("Received partial page object")

                document = converter.convert(page_id, storage.output_dir)
                storage.write_document(
                    document.output_path,
                    build_document(document, options.no_frontmatter),
                )
                index.add_page(document.output_path, document.title, document.weight)
            except Exception as e:
                logger.warning(f"Failed to export page {page_id}: {e}")
                yield PageEvent(
                    current_page=current_page,
                    total_pages=total_pages,
                    page_id=page_id,
                    error=_error_message(e),
                )
                continue

            yield PageEvent(
                current_page=current_page,
                total_pages=total_pages,
                page_id=page_id,
                output_path=document.output_path,
            )

        if not options.skip_meta:
            for directory in index.get_directories():
                index.emit_index(directory)
                yield IndexEmittedEvent(directory=directory)

        if options.include_json:
            yield RawJsonEmittedEvent(path=self._export_raw_json(pages, storage))

        yield CompleteEvent()

    def _export_raw_json(self, pages: list[dict], storage: ExportStorage) -> Path:
        """Re-fetch every page with its blocks and save them as one JSON file."""
        snapshot = [snapshot_page(self._client, page["id"]) for page in pages]

        path = storage.save_json({"pages": snapshot})
        logger.info(f"Wrote raw JSON snapshot: {path}")
        return path
