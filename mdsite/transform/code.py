"""Tags code blocks with a Prism ``language-*`` class taken from the fence info."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from .pipeline import TokenTransform, html_token

DEFAULT_LANGUAGE = "none"

# Short names Prism doesn't load on its own.
LANGUAGE_ALIASES: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rs": "rust",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "yml": "yaml",
    "c++": "cpp",
}

_LANGUAGE_RE = re.compile(r"^[\w+#.-]+$")


def fence_language(info: str, default: str = DEFAULT_LANGUAGE) -> str:
    """First word of a fence info string, normalized; *default* if missing or unusable."""
    words = info.strip().split(maxsplit=1)
    if not words:
        return default
    lang = words[0].lower()
    if not _LANGUAGE_RE.match(lang):
        return default
    return LANGUAGE_ALIASES.get(lang, lang)


def code_block_html(content: str, language: str) -> str:
    return (
        f'<pre><code class="language-{escapeHtml(language)}">'
        f"{escapeHtml(content)}</code></pre>\n"
    )


class CodeLanguageTagger(TokenTransform):
    def __init__(self, default_language: str = DEFAULT_LANGUAGE):
        self.default_language = default_language

    def process(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.type == "fence":
                lang = fence_language(token.info, self.default_language)
                yield html_token(code_block_html(token.content, lang), block=True)
            elif token.type == "code_block":
                yield html_token(code_block_html(token.content, self.default_language), block=True)
            else:
                yield token
