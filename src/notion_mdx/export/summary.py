# ABOUTME: Summary of an export run built from its progress events.
# ABOUTME: Counts exported and failed pages and derives an overall status.

import time
from dataclasses import dataclass, field, asdict
from typing import Literal

from .progress import (
    CompleteEvent,
    ExportProgress,
    IndexEmittedEvent,
    PageEvent,
    RawJsonEmittedEvent,
    StartEvent,
)


@dataclass
class ExportSummary:
    """Running totals for a single export."""

    total_pages: int = 0
    exported: int = 0
    failed: list[dict] = field(default_factory=list)
    indexes: int = 0
    raw_json: bool = False
    completed: bool = False
    duration_seconds: float = 0.0
    _started: float = field(default_factory=time.monotonic, repr=False)

    @property
    def status(self) -> Literal["completed", "completed_with_warnings", "failed"]:
        if not self.failed:
            return "completed"
        if self.exported == 0:
            return "failed"
        return "completed_with_warnings"

    def record(self, event: ExportProgress) -> ExportProgress:
        """Account for one event and hand it back for further processing."""
        if isinstance(event, StartEvent):
            self.total_pages = event.total_pages
        elif isinstance(event, PageEvent):
            if event.ok:
                self.exported += 1
            else:
                self.failed.append({"page_id": event.page_id, "error": event.error})
        elif isinstance(event, IndexEmittedEvent):
            self.indexes += 1
        elif isinstance(event, RawJsonEmittedEvent):
            self.raw_json = True
        elif isinstance(event, CompleteEvent):
            self.completed = True
            self.duration_seconds = round(time.monotonic() - self._started, 2)
        return event

    def to_dict(self) -> dict:
        """Convert the summary to a dictionary for logging or JSON."""
        data = asdict(self)
        data.pop("_started")
        data["status"] = self.status
        return data
