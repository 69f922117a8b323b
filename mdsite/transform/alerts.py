"""GitHub-style alert blocks (``> [!NOTE]``) detected inside plain blockquotes.

The tag for a blockquote can only be chosen once its first text has been
seen, so each blockquote starts out buffering. ``advance`` is the whole
state machine for a single blockquote; ``AlertTransform`` keeps one state
per open (possibly nested) blockquote and drives it over the event stream.

    OUTSIDE --open--> ACCUMULATING --marker--> IN_ALERT ----close--> OUTSIDE
                           |  \\--overflow--> IN_PLAIN_BLOCKQUOTE --close--> OUTSIDE
                           \\------------------close-------------------> OUTSIDE
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from .pipeline import TokenTransform, html_token, text_token

DEFAULT_BUFFER_LIMIT = 10

_MARKER_RE = re.compile(r"^\[!([^\]]*)\]")
_ALERT_TYPE_RE = re.compile(r"^[\w-]+$")
_BREAKS = ("softbreak", "hardbreak")


class AlertPhase(str, Enum):
    OUTSIDE = "outside"
    ACCUMULATING = "accumulating"
    IN_ALERT = "in_alert"
    IN_PLAIN_BLOCKQUOTE = "in_plain_blockquote"


@dataclass(frozen=True)
class AlertState:
    """Parse state for one blockquote. Never shared between blockquotes."""

    phase: AlertPhase = AlertPhase.OUTSIDE
    alert_type: str | None = None
    buffer: str = ""
    held: tuple[Token, ...] = ()
    skip_break: bool = False

    @property
    def in_alert(self) -> bool:
        """True between blockquote-open and blockquote-close."""
        return self.phase is not AlertPhase.OUTSIDE

    @property
    def started(self) -> bool:
        """True once the opening tag has been emitted."""
        return self.phase in (AlertPhase.IN_ALERT, AlertPhase.IN_PLAIN_BLOCKQUOTE)


def alert_open_tag(alert_type: str) -> str:
    return f'<blockquote class="alert alert-{escapeHtml(alert_type)}">'


def advance(
    state: AlertState, token: Token, *, limit: int = DEFAULT_BUFFER_LIMIT
) -> tuple[AlertState, list[Token]]:
    """Apply one event to *state*; return the next state and the events to emit.

    A blockquote-open always starts a fresh scope; keeping enclosing scopes
    alive across nesting is the caller's job (see ``AlertTransform``).
    """
    if token.type == "blockquote_open":
        return AlertState(phase=AlertPhase.ACCUMULATING), []

    if state.phase is AlertPhase.OUTSIDE:
        return state, [token]

    if token.type == "blockquote_close":
        return AlertState(), _close(state)

    if state.skip_break:
        # The marker had a line to itself; its line break is not content.
        state = replace(state, skip_break=False)
        if token.type in _BREAKS:
            return state, []

    if state.phase is not AlertPhase.ACCUMULATING:
        return state, [token]

    if token.type != "text":
        return replace(state, held=state.held + (token,)), []

    buffer = state.buffer + token.content
    held = state.held + (token,)

    marker = _MARKER_RE.match(buffer)
    if marker:
        alert_type = marker.group(1).strip().lower()
        if _ALERT_TYPE_RE.match(alert_type):
            out = [html_token(alert_open_tag(alert_type))]
            # Held text is exactly the marker prefix; keep only structure.
            out.extend(t for t in held if t.type != "text")
            remainder = buffer[marker.end():].lstrip()
            if remainder:
                out.append(text_token(remainder))
            return (
                AlertState(
                    phase=AlertPhase.IN_ALERT,
                    alert_type=alert_type,
                    skip_break=not remainder,
                ),
                out,
            )
        # A closed but unusable marker can never resolve; treat as plain.
        return _as_plain(held)

    if len(buffer) > limit:
        return _as_plain(held)

    return replace(state, buffer=buffer, held=held), []


def _as_plain(held: tuple[Token, ...]) -> tuple[AlertState, list[Token]]:
    return (
        AlertState(phase=AlertPhase.IN_PLAIN_BLOCKQUOTE),
        [html_token("<blockquote>"), *held],
    )


def _close(state: AlertState) -> list[Token]:
    if state.phase is AlertPhase.ACCUMULATING:
        # Never resolved: flush what was held as a plain blockquote.
        return [html_token("<blockquote>"), *state.held, html_token("</blockquote>")]
    return [html_token("</blockquote>")]


def flush_plain(state: AlertState) -> tuple[AlertState, list[Token]]:
    """Resolve an ACCUMULATING state as a plain blockquote right away."""
    if state.phase is not AlertPhase.ACCUMULATING:
        return state, []
    return _as_plain(state.held)


class AlertTransform(TokenTransform):
    def __init__(self, buffer_limit: int = DEFAULT_BUFFER_LIMIT):
        self.buffer_limit = buffer_limit

    def process(self, tokens: Iterable[Token]) -> Iterator[Token]:
        stack: list[AlertState] = []
        for token in tokens:
            if token.type == "blockquote_open":
                if stack:
                    # The enclosing blockquote can't wait on text that
                    # belongs to the nested one.
                    stack[-1], out = flush_plain(stack[-1])
                    yield from out
                state, out = advance(AlertState(), token, limit=self.buffer_limit)
                stack.append(state)
                yield from out
                continue

            if not stack:
                yield token
                continue

            stack[-1], out = advance(stack[-1], token, limit=self.buffer_limit)
            if stack[-1].phase is AlertPhase.OUTSIDE:
                stack.pop()
            yield from out

        # Unbalanced input: close whatever is still open.
        while stack:
            _, out = advance(stack.pop(), Token("blockquote_close", "blockquote", -1),
                             limit=self.buffer_limit)
            yield from out
