"""Markdown transform pipeline: alerts, link rewriting, code language tags."""

from .alerts import AlertPhase, AlertState, AlertTransform, advance
from .code import CodeLanguageTagger, fence_language
from .links import LinkRewriter, rewrite_href
from .pipeline import TokenTransform, TransformPipeline, flatten, group_inline
from .transformer import MarkdownTransformer, create_parser, default_pipeline

__all__ = [
    "AlertPhase",
    "AlertState",
    "AlertTransform",
    "CodeLanguageTagger",
    "LinkRewriter",
    "MarkdownTransformer",
    "TokenTransform",
    "TransformPipeline",
    "advance",
    "create_parser",
    "default_pipeline",
    "fence_language",
    "flatten",
    "group_inline",
    "rewrite_href",
]
