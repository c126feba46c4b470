# ABOUTME: File output for an export run.
# ABOUTME: Creates the output directory and writes documents and the JSON snapshot.

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

RAW_JSON_FILENAME = "index.json"


class ExportStorage:
    """Manages the output directory of one export."""

    def __init__(self, output_dir: Path):
        """Initialize storage for an export run.

        Args:
            output_dir: Directory documents are written under.
        """
        self.output_dir = Path(output_dir)

    def create_directories(self) -> None:
        """Create the output directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Exporting to: {self.output_dir}")

    def write_document(self, path: Path, content: str) -> Path:
        """Write a document, creating its directory if needed."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug(f"Wrote document: {path}")
        return path

    def save_json(self, data: dict, filename: str = RAW_JSON_FILENAME) -> Path:
        """Save data as JSON in the output directory.

        Returns:
            Path to the saved file.
        """
        file_path = self.output_dir / filename
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        return file_path
