from .lexer import tokenize, strip_eof, Token
from .options import FormatOptions, FormatOptionsError
from .spacing import join_tokens
from .spans import measure_span, should_expand, Span
from .layout import Renderer
from .formatter import format_source, is_formatted
from .decorations import bracket_marks, indent_guides, BracketMark, IndentGuide

__all__ = [
    'tokenize',
    'strip_eof',
    'Token',
    'FormatOptions',
    'FormatOptionsError',
    'join_tokens',
    'measure_span',
    'should_expand',
    'Span',
    'Renderer',
    'format_source',
    'is_formatted',
    'bracket_marks',
    'indent_guides',
    'BracketMark',
    'IndentGuide',
]
