import logging
from typing import Any, Mapping, Optional, Union

from .layout import Renderer
from .lexer import strip_eof, tokenize
from .logging_utils import debug_log_call
from .options import FormatOptions, FormatOptionsError

logger = logging.getLogger(__name__)

OptionsLike = Union[None, FormatOptions, Mapping[str, Any]]


def coerce_options(options: OptionsLike) -> FormatOptions:
    if options is None:
        return FormatOptions()
    if isinstance(options, FormatOptions):
        return options
    if isinstance(options, Mapping):
        return FormatOptions.from_mapping(options)
    raise FormatOptionsError(f'unsupported options value {options!r}')


@debug_log_call(logger)
def format_source(text: str, options: OptionsLike = None) -> str:
    """Return ``text`` in canonical layout, ending with exactly one newline.

    Lexical and bracket anomalies are formatted best-effort; only invalid
    options raise (:class:`FormatOptionsError`).
    """

    opts = coerce_options(options)
    tokens = strip_eof(tokenize(text))
    logger.debug(
        'Formatting %d token(s) with indent_size=%d max_line_length=%d',
        len(tokens),
        opts.indent_size,
        opts.max_line_length,
    )
    return Renderer(tokens, opts).render()


def is_formatted(text: str, options: OptionsLike = None) -> bool:
    return format_source(text, options) == text
