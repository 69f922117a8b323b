"""TransformPipeline — runs ordered token transforms over a flattened event stream."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from markdown_it.token import Token


class TokenTransform(ABC):
    @abstractmethod
    def process(self, tokens: Iterable[Token]) -> Iterator[Token]:
        """Consume tokens left to right and yield the rewritten stream."""
        ...


class TransformPipeline:
    def __init__(self, transforms: list[TokenTransform]):
        self.transforms = transforms

    def process(self, tokens: Iterable[Token]) -> Iterator[Token]:
        # Each stage pulls lazily from the previous one, so the whole
        # pipeline is still one pass over the input.
        stream: Iterator[Token] = iter(tokens)
        for t in self.transforms:
            stream = t.process(stream)
        return stream


def html_token(content: str, *, block: bool = False) -> Token:
    """Raw HTML event, rendered verbatim."""
    if block:
        return Token("html_block", "", 0, content=content, block=True)
    return Token("html_inline", "", 0, content=content)


def text_token(content: str) -> Token:
    return Token("text", "", 0, content=content)


def flatten(tokens: Iterable[Token]) -> Iterator[Token]:
    """Expand block-level ``inline`` tokens into their children.

    markdown-it nests inline content (text, links, emphasis) under an
    ``inline`` token; flattening gives one left-to-right event stream.
    """
    for token in tokens:
        if token.type == "inline":
            yield from token.children or ()
        else:
            yield token


def group_inline(tokens: Iterable[Token]) -> list[Token]:
    """Inverse of :func:`flatten`: wrap runs of non-block tokens in ``inline`` tokens."""
    grouped: list[Token] = []
    run: list[Token] = []
    for token in tokens:
        if token.block:
            if run:
                grouped.append(Token("inline", "", 0, children=run))
                run = []
            grouped.append(token)
        else:
            run.append(token)
    if run:
        grouped.append(Token("inline", "", 0, children=run))
    return grouped
