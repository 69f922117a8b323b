"""SiteBuilder — converts a markdown tree into the html_output/ site in one batch."""

from __future__ import annotations

import logging
import shutil
import threading
import time
from importlib import resources
from pathlib import Path

from pydantic import BaseModel

from mdsite.config.models import SiteConfig
from mdsite.index.builder import IndexBuilder
from mdsite.render.renderer import PageRenderer
from mdsite.scanner.models import ConvertedDocument, SourceDocument
from mdsite.scanner.scanner import DocumentScanner, extract_title, output_path_for
from mdsite.transform.transformer import MarkdownTransformer

logger = logging.getLogger(__name__)

STATIC_ASSETS = ("style.css", "prism.css")
PRISM_SCRIPT = "prism.js"


class SiteBuildError(RuntimeError):
    """A build aborted on an I/O failure. Nothing is retried."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class BuildReport(BaseModel):
    root: Path
    output_dir: Path
    documents: list[ConvertedDocument] = []
    index_path: Path | None = None
    duration: float = 0.0


def write_static_assets(static_dir: Path) -> list[Path]:
    """Copy the bundled stylesheet and highlighter theme into *static_dir*."""
    static_dir.mkdir(parents=True, exist_ok=True)
    package_static = resources.files("mdsite.site") / "static"
    written: list[Path] = []
    for name in STATIC_ASSETS:
        dest = static_dir / name
        dest.write_bytes((package_static / name).read_bytes())
        written.append(dest)
    return written


class SiteBuilder:
    """Scans, converts, renders and writes a whole site.

    Builds are serialized on ``lock`` so a watcher-triggered rebuild never
    overlaps another one writing the same output directory.
    """

    def __init__(self, root: str | Path, config: SiteConfig | None = None) -> None:
        self.config = config or SiteConfig()
        self.root = Path(root).resolve()
        self.output_dir = self.root / self.config.output.dir_name
        self.static_dir = self.output_dir / self.config.output.static_dir
        self.index_path = self.output_dir / self.config.output.index_name

        self.transformer = MarkdownTransformer(self.config.markdown)
        self.renderer = PageRenderer(self.config)
        self.index_builder = IndexBuilder(self.renderer, root_name=self.root.name)
        self.scanner = DocumentScanner(
            self.root,
            ignore_patterns=self.config.scan.ignore_patterns,
            exclude=[self.output_dir],
        )
        self.lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def convert(self, source: SourceDocument) -> ConvertedDocument:
        """Convert a single document. Pure: touches no files."""
        return ConvertedDocument(
            title=extract_title(source.content, source.path),
            source_path=source.relative_path,
            output_path=output_path_for(source.relative_path),
            body=self.transformer.convert(source.content),
        )

    def build(self, *, clean: bool = False) -> BuildReport:
        """Convert every document, then write the index.

        Any OSError aborts the whole batch as a SiteBuildError.
        """
        if not self.root.is_dir():
            raise SiteBuildError(f"Source directory not found: {self.root}", self.root)

        with self.lock:
            start = time.monotonic()
            try:
                if clean and self.output_dir.exists():
                    shutil.rmtree(self.output_dir)
                    logger.info("removed %s", self.output_dir)
                self.output_dir.mkdir(parents=True, exist_ok=True)
                write_static_assets(self.static_dir)
                local_script = self.config.highlighter.local_script
                if local_script is not None:
                    shutil.copyfile(local_script, self.static_dir / PRISM_SCRIPT)

                documents: list[ConvertedDocument] = []
                for path in self.scanner.find():
                    try:
                        source = self.scanner.read(path)
                    except UnicodeDecodeError as e:
                        raise SiteBuildError(f"Not valid UTF-8: {path}", path) from e
                    doc = self.convert(source)
                    page = self.renderer.render_page(doc.title, doc.body)
                    self._write(self.output_dir / doc.output_path, page)
                    documents.append(doc)

                # The index needs the full document set, so it always goes last.
                self._write(self.index_path, self.index_builder.build(documents))
            except OSError as e:
                path = Path(e.filename) if e.filename else None
                raise SiteBuildError(f"{e.strerror or e}: {path or self.root}", path) from e

            report = BuildReport(
                root=self.root,
                output_dir=self.output_dir,
                documents=documents,
                index_path=self.index_path,
                duration=time.monotonic() - start,
            )
        logger.info(
            "built %d page(s) into %s in %.2fs",
            len(report.documents), self.output_dir, report.duration,
        )
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _write(dest: Path, html: str) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(html, encoding="utf-8")
        logger.debug("wrote %s (%d bytes)", dest, len(html))
