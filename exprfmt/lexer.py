import logging
from dataclasses import dataclass
from typing import List, Sequence

from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)

COMMENT = 'COMMENT'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
LBRACKET = 'LBRACKET'
RBRACKET = 'RBRACKET'
COMMA = 'COMMA'
NEWLINE = 'NEWLINE'
OPERATOR = 'OPERATOR'
KEYWORD = 'KEYWORD'
IDENTIFIER = 'IDENTIFIER'
NUMBER = 'NUMBER'
STRING = 'STRING'
EOF = 'EOF'

SYMBOLS = {
    '(': LPAREN,
    ')': RPAREN,
    '[': LBRACKET,
    ']': RBRACKET,
    ',': COMMA,
}

KEYWORDS = frozenset({'IF', 'in', 'and', 'or', 'not', 'let'})

# longest first, so '==' never splits into two '='-prefixed pieces
OPERATORS = ('==', '!=', '>=', '<=', '&&', '||', '**', '>', '<', '=', '!', '+', '-', '*', '/', '%')

QUOTES = '"\'`'
WS = ' \t\r'


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    col: int

    def is_op(self, *texts: str) -> bool:
        return self.kind == OPERATOR and (not texts or self.text in texts)


def _is_ident_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch in '_$')


def _is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in '_$')


def _is_number_char(ch: str) -> bool:
    return '0' <= ch <= '9' or ch in '.eE'


@debug_log_call(logger, log_result=False)
def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tokens, ending with a single ``EOF`` token.

    The scan never fails: unknown characters are dropped and an unterminated
    string runs to the end of input.
    """

    tokens: List[Token] = []
    i = 0
    n = len(text)
    line = 1
    col = 1

    def push(kind: str, value: str) -> None:
        tokens.append(Token(kind, value, line, col))

    while i < n:
        ch = text[i]
        if ch in WS:
            i += 1
            col += 1
            continue
        if ch == '\n':
            push(NEWLINE, '\n')
            i += 1
            line += 1
            col = 1
            continue
        if ch == '#' or text.startswith('//', i):
            end = text.find('\n', i)
            if end < 0:
                end = n
            push(COMMENT, text[i:end].rstrip())
            col += end - i
            i = end
            continue
        if ch in SYMBOLS:
            push(SYMBOLS[ch], ch)
            i += 1
            col += 1
            continue
        if ch in QUOTES:
            j = i + 1
            while j < n and text[j] != ch:
                if text[j] == '\\':
                    j += 1
                j += 1
            j = min(j + 1, n)
            value = text[i:j]
            push(STRING, value)
            breaks = value.count('\n')
            if breaks:
                line += breaks
                col = len(value) - value.rfind('\n')
            else:
                col += len(value)
            i = j
            continue
        if '0' <= ch <= '9':
            j = i
            while j < n and _is_number_char(text[j]):
                j += 1
            push(NUMBER, text[i:j])
            col += j - i
            i = j
            continue
        op = next((candidate for candidate in OPERATORS if text.startswith(candidate, i)), None)
        if op is not None:
            push(OPERATOR, op)
            i += len(op)
            col += len(op)
            continue
        if _is_ident_start(ch):
            j = i + 1
            while j < n and _is_ident_char(text[j]):
                j += 1
            value = text[i:j]
            push(KEYWORD if value in KEYWORDS else IDENTIFIER, value)
            col += j - i
            i = j
            continue
        logger.debug('Dropping unknown character %r at line %d, col %d', ch, line, col)
        i += 1
        col += 1

    push(EOF, '')
    return tokens


def strip_eof(tokens: Sequence[Token]) -> List[Token]:
    """Return the layout input: ``tokens`` without the end marker."""

    return [tok for tok in tokens if tok.kind != EOF]
