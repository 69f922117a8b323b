"""Shared test fixtures for mdsite."""

from pathlib import Path

import pytest
from markdown_it.token import Token

from mdsite.config.models import SiteConfig
from mdsite.scanner.models import ConvertedDocument
from mdsite.transform.transformer import MarkdownTransformer


def bq_open() -> Token:
    return Token("blockquote_open", "blockquote", 1, block=True)


def bq_close() -> Token:
    return Token("blockquote_close", "blockquote", -1, block=True)


def text(content: str) -> Token:
    return Token("text", "", 0, content=content)


def make_doc(source: str, title: str | None = None) -> ConvertedDocument:
    src = Path(source)
    return ConvertedDocument(
        title=title if title is not None else src.stem,
        source_path=src,
        output_path=src.with_suffix(".html"),
        body="",
    )


@pytest.fixture
def sample_config():
    return SiteConfig()


@pytest.fixture
def transformer():
    return MarkdownTransformer()


@pytest.fixture
def docs_tree(tmp_path):
    """A small markdown tree with a root page and two sub-directories."""
    root = tmp_path / "docs"
    (root / "guide").mkdir(parents=True)
    (root / "api").mkdir()

    (root / "README.md").write_text(
        "# Welcome\n\nStart with the [guide](guide/1-intro.md).\n"
    )
    (root / "guide" / "1-intro.md").write_text(
        "# Intro\n\n> [!NOTE] Read this first.\n\nNext: [setup](2-setup.md)\n"
    )
    (root / "guide" / "2-setup.md").write_text(
        "# Setup\n\n```bash\npip install mdsite\n```\n"
    )
    (root / "guide" / "faq.md").write_text("No heading here.\n")
    (root / "api" / "reference.md").write_text(
        "# Reference\n\n| name | type |\n|------|------|\n| id | int |\n"
    )
    return root
