"""Markdown -> HTML conversion built on markdown-it's token stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdsite.config.models import MarkdownConfig

from .alerts import AlertTransform
from .code import CodeLanguageTagger
from .links import LinkRewriter
from .pipeline import TransformPipeline, flatten, group_inline

logger = logging.getLogger(__name__)


def create_parser() -> MarkdownIt:
    """CommonMark plus strikethrough, tables, footnotes and task lists."""
    return (
        MarkdownIt("commonmark")
        .enable(["table", "strikethrough"])
        .use(footnote_plugin)
        .use(tasklists_plugin)
    )


def default_pipeline(config: MarkdownConfig | None = None) -> TransformPipeline:
    cfg = config or MarkdownConfig()
    return TransformPipeline([
        AlertTransform(buffer_limit=cfg.alert_buffer_limit),
        LinkRewriter(rewrite_md=cfg.rewrite_links),
        CodeLanguageTagger(default_language=cfg.default_language),
    ])


class MarkdownTransformer:
    """Parses markdown, rewrites the event stream, and renders HTML.

    A fresh ``env`` is used for every document so footnote numbering and
    reference definitions never leak between files.
    """

    def __init__(
        self,
        config: MarkdownConfig | None = None,
        *,
        parser: MarkdownIt | None = None,
        pipeline: TransformPipeline | None = None,
    ) -> None:
        self.md = parser or create_parser()
        self.pipeline = pipeline or default_pipeline(config)

    def events(self, text: str, env: dict[str, Any] | None = None) -> list[Token]:
        """Parse *text* into a flat event stream."""
        return list(flatten(self.md.parse(text, env if env is not None else {})))

    def transform(self, events: Iterable[Token]) -> list[Token]:
        return list(self.pipeline.process(events))

    def render(self, events: Iterable[Token], env: dict[str, Any] | None = None) -> str:
        return self.md.renderer.render(
            group_inline(events), self.md.options, env if env is not None else {}
        )

    def convert(self, text: str) -> str:
        env: dict[str, Any] = {}
        events = self.events(text, env)
        html = self.render(self.pipeline.process(events), env)
        logger.debug("converted %d event(s) into %d bytes of HTML", len(events), len(html))
        return html
