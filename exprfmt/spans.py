"""Read-only queries over a token list: neighbour lookup and span measuring.

Every function takes the immutable token sequence plus an index and returns a
value; none of them advance a shared cursor.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .lexer import COMMENT, IDENTIFIER, KEYWORD, LPAREN, NEWLINE, RPAREN, Token
from .options import FormatOptions
from .spacing import join_tokens

_CALLABLE = (IDENTIFIER, KEYWORD)


@dataclass(frozen=True)
class Span:
    length: int
    has_newline: bool
    immediate_nesting: bool
    end: int


def previous_index(tokens: Sequence[Token], idx: int, *, skip_comments: bool = False) -> Optional[int]:
    skip = (NEWLINE, COMMENT) if skip_comments else (NEWLINE,)
    j = idx - 1
    while j >= 0 and tokens[j].kind in skip:
        j -= 1
    return j if j >= 0 else None


def next_index(tokens: Sequence[Token], idx: int) -> Optional[int]:
    j = idx
    while j < len(tokens) and tokens[j].kind == NEWLINE:
        j += 1
    return j if j < len(tokens) else None


def previous_token(tokens: Sequence[Token], idx: int, *, skip_comments: bool = False) -> Optional[Token]:
    j = previous_index(tokens, idx, skip_comments=skip_comments)
    return tokens[j] if j is not None else None


def is_call(tokens: Sequence[Token], idx: int) -> bool:
    return (
        idx + 1 < len(tokens)
        and tokens[idx].kind in _CALLABLE
        and tokens[idx + 1].kind == LPAREN
    )


def opening_index(tokens: Sequence[Token], idx: int) -> Optional[int]:
    """Index of the ``(`` opening a call or group that starts at ``idx``."""

    if is_call(tokens, idx):
        return idx + 1
    if idx < len(tokens) and tokens[idx].kind == LPAREN:
        return idx
    return None


def _has_immediate_nesting(tokens: Sequence[Token], open_idx: int) -> bool:
    # F(G(...)) and F((...)) nest immediately; (G(...)) does not
    if open_idx == 0 or tokens[open_idx - 1].kind not in _CALLABLE:
        return False
    first = next_index(tokens, open_idx + 1)
    if first is None:
        return False
    return tokens[first].kind == LPAREN or is_call(tokens, first)


def span_indices(tokens: Sequence[Token], start: int, span: Span) -> List[int]:
    """Non-newline token indices from ``start`` through the end of ``span``."""

    stop = min(span.end, len(tokens) - 1)
    return [k for k in range(start, stop + 1) if tokens[k].kind != NEWLINE]


def measure_span(tokens: Sequence[Token], open_idx: int) -> Span:
    """Measure the parenthesized span opened at ``open_idx``.

    ``length`` is the width of the span rendered on one line with the normal
    spacing rules. A span left open at end of input ends at ``len(tokens)``.
    """

    depth = 0
    collected: List[Token] = []
    has_newline = False
    seen_newline = False
    end = len(tokens)
    for j in range(open_idx, len(tokens)):
        tok = tokens[j]
        if tok.kind == NEWLINE:
            seen_newline = True
            continue
        # trailing newlines of an unclosed span are not inside it
        has_newline = has_newline or seen_newline
        collected.append(tok)
        if tok.kind == LPAREN:
            depth += 1
        elif tok.kind == RPAREN:
            depth -= 1
            if depth == 0:
                end = j
                break
    return Span(
        length=len(join_tokens(collected)),
        has_newline=has_newline,
        immediate_nesting=_has_immediate_nesting(tokens, open_idx),
        end=end,
    )


def should_expand(span: Span, options: FormatOptions) -> bool:
    """Expand when the one-line form is too long or the source was already broken."""

    return span.length > options.max_line_length or span.has_newline
