"""Builds the navigation index: documents grouped by directory, in a stable order."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from mdsite.render.renderer import PageRenderer
from mdsite.scanner.models import ConvertedDocument

ROOT_SECTION = "Root"


@dataclass
class IndexSection:
    name: str
    documents: list[ConvertedDocument] = field(default_factory=list)


def numeric_prefix(stem: str) -> int | None:
    """Digits before the first ``-``: ``"2-setup"`` -> 2, ``"setup"`` -> None."""
    head, sep, _ = stem.partition("-")
    if not sep or not (head.isascii() and head.isdigit()):
        return None
    return int(head)


def sort_key(doc: ConvertedDocument) -> tuple[int, int, str, str]:
    """Numbered docs first (by number), then the rest by case-insensitive title."""
    prefix = numeric_prefix(doc.source_path.stem)
    if prefix is not None:
        return (0, prefix, "", doc.source_path.as_posix())
    return (1, 0, doc.title.lower(), doc.source_path.as_posix())


def group_documents(
    documents: Iterable[ConvertedDocument], root_name: str = ROOT_SECTION
) -> dict[str, list[ConvertedDocument]]:
    """Group by immediate parent directory name, keeping first-seen directory order.

    Files at the top of the tree are grouped under *root_name*.
    """
    groups: dict[str, list[ConvertedDocument]] = {}
    for doc in documents:
        key = doc.source_path.parent.name or root_name
        groups.setdefault(key, []).append(doc)
    for docs in groups.values():
        docs.sort(key=sort_key)
    return groups


class IndexBuilder:
    def __init__(self, renderer: PageRenderer, root_name: str = ROOT_SECTION):
        self.renderer = renderer
        self.root_name = root_name or ROOT_SECTION

    def sections(self, documents: Iterable[ConvertedDocument]) -> list[IndexSection]:
        groups = group_documents(documents, self.root_name)
        return [IndexSection(name=name, documents=docs) for name, docs in groups.items()]

    def build(self, documents: Iterable[ConvertedDocument]) -> str:
        """Render the index page for every converted document."""
        return self.renderer.render_index(self.sections(documents))
