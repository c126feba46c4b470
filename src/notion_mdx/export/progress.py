# ABOUTME: Progress events produced while an export runs.
# ABOUTME: A closed set of frozen dataclasses, one per kind of event.

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class StartEvent:
    """The collection was enumerated."""
    total_pages: int


@dataclass(frozen=True)
class PageEvent:
    """One page was exported, or failed with ``error``."""
    current_page: int
    total_pages: int
    page_id: str
    output_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class IndexEmittedEvent:
    """A _meta.ts file was written for ``directory``."""
    directory: Path


@dataclass(frozen=True)
class RawJsonEmittedEvent:
    """The consolidated raw JSON snapshot was written."""
    path: Path


@dataclass(frozen=True)
class CompleteEvent:
    """The export finished."""


ExportProgress = Union[StartEvent, PageEvent, IndexEmittedEvent, RawJsonEmittedEvent, CompleteEvent]
