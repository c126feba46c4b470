# ABOUTME: Export orchestration package.
# ABOUTME: Exports the database exporter, progress events, storage and run summary.

from .exporter import MarkdownExporter, build_document
from .progress import (
    CompleteEvent,
    ExportProgress,
    IndexEmittedEvent,
    PageEvent,
    RawJsonEmittedEvent,
    StartEvent,
)
from .storage import ExportStorage
from .summary import ExportSummary

__all__ = [
    "MarkdownExporter",
    "build_document",
    "CompleteEvent",
    "ExportProgress",
    "IndexEmittedEvent",
    "PageEvent",
    "RawJsonEmittedEvent",
    "StartEvent",
    "ExportStorage",
    "ExportSummary",
]
