"""Rewrites markdown links to the generated .html pages and tags them as nav buttons."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from urllib.parse import urlsplit, urlunsplit

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from .pipeline import TokenTransform, html_token

NAV_CLASS = "nav-button"


def rewrite_href(href: str) -> str:
    """guide.md -> guide.html; only a trailing .md on the URL path is touched.

    Query strings and fragments survive (``a.md#x`` -> ``a.html#x``) and
    ``notes.md.bak`` is left alone.
    """
    parts = urlsplit(href)
    if not parts.path.endswith(".md"):
        return href
    return urlunsplit(parts._replace(path=parts.path[: -len(".md")] + ".html"))


def anchor_open_tag(href: str, title: str | None = None) -> str:
    title_attr = f' title="{escapeHtml(title)}"' if title else ""
    return f'<a href="{escapeHtml(href)}"{title_attr} class="{NAV_CLASS}">'


class LinkRewriter(TokenTransform):
    def __init__(self, rewrite_md: bool = True):
        self.rewrite_md = rewrite_md

    def process(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.type == "link_open":
                href = str(token.attrGet("href") or "")
                if self.rewrite_md:
                    href = rewrite_href(href)
                title = token.attrGet("title")
                yield html_token(anchor_open_tag(href, str(title) if title else None))
            elif token.type == "link_close":
                yield html_token("</a>")
            else:
                yield token
