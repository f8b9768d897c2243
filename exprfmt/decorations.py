"""Editor decorations computed straight from raw text.

These helpers color brackets by nesting depth and draw indent guides. They use
their own light scanner instead of the tokenizer and carry no obligation
toward the formatted output.
"""

from dataclasses import dataclass
from typing import List

BRACKET_COLORS = (
    '#F1798B',  # coral pink
    '#F1A25E',  # amber orange
    '#5CA8F7',  # sky blue
    '#6AD18A',  # mint green
    '#8B7CF6',  # lilac violet
)

INDENT_COLORS = (
    '#8A594A',  # dark brown
    '#B0895A',  # brown
    '#4A78A8',  # blue
    '#4DAA9A',  # teal
    '#6A5BAE',  # violet
)


@dataclass(frozen=True)
class BracketMark:
    offset: int
    char: str
    depth: int

    @property
    def color_index(self) -> int:
        return self.depth % len(BRACKET_COLORS)

    @property
    def color(self) -> str:
        return BRACKET_COLORS[self.color_index]


@dataclass(frozen=True)
class IndentGuide:
    line: int
    column: int
    level: int

    @property
    def color_index(self) -> int:
        return self.level % len(INDENT_COLORS)

    @property
    def color(self) -> str:
        return INDENT_COLORS[self.color_index]


def _skip_string(text: str, i: int) -> int:
    quote = text[i]
    i += 1
    while i < len(text):
        if text[i] == '\\':
            i += 2
            continue
        if text[i] == quote:
            return i + 1
        i += 1
    return len(text)


def bracket_marks(text: str) -> List[BracketMark]:
    """Return every ``(`` and ``)`` outside strings and comments with its depth.

    A closing bracket takes the depth of the bracket it closes; stray closers
    are clamped to depth zero.
    """

    marks: List[BracketMark] = []
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '#' or text.startswith('//', i):
            end = text.find('\n', i)
            i = n if end < 0 else end
            continue
        if text.startswith('/*', i):
            end = text.find('*/', i + 2)
            i = n if end < 0 else end + 2
            continue
        if ch in '"\'':
            i = _skip_string(text, i)
            continue
        if ch == '(':
            marks.append(BracketMark(i, ch, depth))
            depth += 1
        elif ch == ')':
            depth = max(0, depth - 1)
            marks.append(BracketMark(i, ch, depth))
        i += 1
    return marks


def indent_guides(text: str, indent_size: int = 2) -> List[IndentGuide]:
    """One guide per full indent level of leading spaces on each non-blank line.

    ``line`` is zero-based, ``column`` is where the guide is drawn.
    """

    if indent_size <= 0:
        raise ValueError(f'indent_size must be positive, got {indent_size}')
    guides: List[IndentGuide] = []
    for line_no, line in enumerate(text.split('\n')):
        if not line.strip():
            continue
        leading = len(line) - len(line.lstrip(' '))
        for level in range(leading // indent_size):
            guides.append(IndentGuide(line_no, level * indent_size, level))
    return guides
