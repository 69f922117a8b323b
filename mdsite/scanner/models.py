"""Pydantic models for documents moving through a site build."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class SourceDocument(BaseModel):
    """A markdown file as read from disk."""

    model_config = ConfigDict(frozen=True)

    path: Path  # absolute
    relative_path: Path
    content: str


class ConvertedDocument(BaseModel):
    """A markdown file after conversion to an HTML body."""

    title: str
    source_path: Path  # relative to the source root
    output_path: Path  # relative to the output root
    body: str
