"""Document scanner: finds markdown files under a root and maps them to output paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from mdsite.scanner.models import SourceDocument

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


def _matches_any(path: Path, patterns: set[str]) -> bool:
    """Check whether any component of *path* matches one of *patterns*."""
    return any(part in patterns for part in path.parts)


def output_path_for(relative_path: Path) -> Path:
    """Mirror a source path into the output tree: ``a/b.md`` -> ``a/b.html``."""
    return relative_path.with_suffix(HTML_SUFFIX)


def extract_title(content: str, path: Path) -> str:
    """Use the first line if it is a level-1 heading, else the file stem."""
    first_line = content.split("\n", 1)[0].rstrip("\r")
    if first_line.startswith("# "):
        title = first_line[2:].strip()
        if title:
            return title
    return path.stem or "Untitled"


class DocumentScanner:
    """Walks a source tree in sorted order and yields SourceDocuments.

    Directories listed in *exclude* (typically the output directory, which
    lives under the source root) and any path component matching
    *ignore_patterns* are skipped.
    """

    def __init__(
        self,
        root: Path,
        *,
        ignore_patterns: Iterable[str] = (),
        exclude: Iterable[Path] = (),
    ) -> None:
        self.root = Path(root).resolve()
        self.ignore = set(ignore_patterns)
        self.exclude = [Path(p).resolve() for p in exclude]

    def find(self) -> list[Path]:
        """Return absolute paths of every markdown file, in a stable order."""
        found: list[Path] = []
        for p in sorted(self.root.rglob(f"*{MARKDOWN_SUFFIX}")):
            if not p.is_file():
                continue
            if any(p.is_relative_to(ex) for ex in self.exclude):
                continue
            if _matches_any(p.relative_to(self.root), self.ignore):
                continue
            found.append(p)
        logger.debug("found %d markdown file(s) under %s", len(found), self.root)
        return found

    def read(self, path: Path) -> SourceDocument:
        """Load one file as UTF-8. OSError and UnicodeDecodeError propagate."""
        path = Path(path)
        if not path.is_absolute():
            path = self.root / path
        return SourceDocument(
            path=path,
            relative_path=path.relative_to(self.root),
            content=path.read_text(encoding="utf-8"),
        )

    def scan(self) -> Iterator[SourceDocument]:
        for path in self.find():
            yield self.read(path)
