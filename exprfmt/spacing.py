from typing import Iterable, Optional

from .lexer import (
    COMMA,
    COMMENT,
    IDENTIFIER,
    KEYWORD,
    LBRACKET,
    LPAREN,
    NEWLINE,
    OPERATOR,
    RBRACKET,
    RPAREN,
    Token,
)

_UNARY_CONTEXT = (OPERATOR, LPAREN, COMMA, LBRACKET)
_NO_SPACE_BEFORE = (RPAREN, RBRACKET, COMMA)
_NO_SPACE_AFTER = (LPAREN, LBRACKET)
_CALLABLE = (IDENTIFIER, KEYWORD)


def is_unary_minus(prev: Optional[Token]) -> bool:
    """Whether a ``-`` preceded by ``prev`` is a sign rather than a subtraction."""

    return prev is None or prev.kind in _UNARY_CONTEXT


def is_sign(tok: Token, prev: Optional[Token]) -> bool:
    """Whether ``tok`` is a unary minus, glued to whatever follows it."""

    return tok.is_op('-') and is_unary_minus(prev)


def needs_space(prev: Token, tok: Token, prev_is_sign: bool) -> bool:
    if tok.kind == COMMENT:
        return True
    if prev.kind == COMMA:
        return True
    if prev.kind in _NO_SPACE_AFTER:
        return False
    if tok.kind in _NO_SPACE_BEFORE:
        return False
    if tok.kind == LPAREN and prev.kind in _CALLABLE:
        return False
    if prev_is_sign:
        return False
    if tok.kind == LPAREN and prev.is_op('!'):
        return False
    return True


def join_tokens(tokens: Iterable[Token], before: Optional[Token] = None) -> str:
    """Render ``tokens`` as a single line.

    ``before`` is the token that precedes the first one in the source, which
    may sit on an earlier output line; it only decides whether a leading
    ``-`` is a sign.
    """

    parts = []
    prev = before
    prev_is_sign = False
    for tok in tokens:
        if tok.kind == NEWLINE:
            continue
        if parts and needs_space(prev, tok, prev_is_sign):
            parts.append(' ')
        parts.append(tok.text)
        prev_is_sign = is_sign(tok, prev)
        prev = tok
    return ''.join(parts)
