# ABOUTME: Generates per-directory _meta.ts navigation files.
# ABOUTME: Orders documents by weight and maps each filename to its page title.

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

META_FILENAME = "_meta.ts"


@dataclass
class IndexEntry:
    """One document registered for a directory index."""
    output_path: Path
    title: str
    weight: int | float = 0

    @property
    def key(self) -> str:
        return self.output_path.stem


_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})


def _escape(text: str) -> str:
    """Make text safe inside a single-quoted TypeScript string literal."""
    return text.translate(_ESCAPES)


class DirectoryIndexBuilder:
    """Collects exported documents by directory and writes their _meta.ts files."""

    def __init__(self):
        self._directories: dict[Path, list[IndexEntry]] = {}

    def add_page(self, output_path: Path | str, title: str, weight: int | float = 0) -> None:
        """Register a written document under its containing directory."""
        output_path = Path(output_path)
        entry = IndexEntry(output_path=output_path, title=title, weight=weight)
        self._directories.setdefault(output_path.parent, []).append(entry)

    def get_directories(self) -> list[Path]:
        """Directories in the order their first document was added."""
        return list(self._directories)

    def render_index(self, directory: Path | str) -> str:
        """Render the _meta.ts contents for a directory, lightest weight first."""
        entries = sorted(self._directories.get(Path(directory), []), key=lambda e: e.weight)
        lines = [f"  '{_escape(entry.key)}': '{_escape(entry.title)}'" for entry in entries]
        return "export default {\n" + ",\n".join(lines) + "\n}\n"

    def emit_index(self, directory: Path | str) -> Path | None:
        """Write the _meta.ts file for one directory.

        Returns:
            Path to the written file, or None if no documents were added there.
        """
        directory = Path(directory)
        if directory not in self._directories:
            return None

        directory.mkdir(parents=True, exist_ok=True)
        meta_path = directory / META_FILENAME
        with open(meta_path, "w", encoding="utf-8") as f:
            f.write(self.render_index(directory))

        logger.debug(f"Wrote index: {meta_path}")
        return meta_path

    def emit_all(self) -> list[Path]:
        """Write _meta.ts files for every directory seen."""
        return [self.emit_index(directory) for directory in self.get_directories()]
