from exprfmt.lexer import strip_eof, tokenize
from exprfmt.options import FormatOptions
from exprfmt.spans import (
    Span,
    measure_span,
    next_index,
    opening_index,
    previous_index,
    should_expand,
)


def toks(text):
    return strip_eof(tokenize(text))


def test_measure_uses_canonical_single_line_form():
    tokens = toks('F(a,b) + 1')

    span = measure_span(tokens, 1)

    assert span == Span(length=len('(a, b)'), has_newline=False, immediate_nesting=False, end=5)


def test_measure_reports_newlines_inside_span():
    tokens = toks('F(\n  a\n)')

    span = measure_span(tokens, 1)

    assert span.has_newline
    assert span.length == len('(a)')
    assert tokens[span.end].text == ')'


def test_measure_stops_at_matching_paren():
    tokens = toks('(1 (b) c) (d)')

    span = measure_span(tokens, 0)

    assert span.end == 6
    assert span.length == len('(1 (b) c)')


def test_truncated_span_ends_past_last_token():
    tokens = toks('F(a, b')

    span = measure_span(tokens, 1)

    assert span.end == len(tokens)
    assert span.length == len('(a, b')


def test_immediate_nesting_requires_enclosing_call():
    assert measure_span(toks('F(G(x))'), 1).immediate_nesting
    assert measure_span(toks('F(\n(x))'), 1).immediate_nesting
    assert not measure_span(toks('(G(x))'), 0).immediate_nesting
    assert not measure_span(toks('F(a, G(x))'), 1).immediate_nesting


def test_should_expand_on_length_or_newline():
    narrow = FormatOptions(max_line_length=5)
    wide = FormatOptions(max_line_length=100)

    assert should_expand(measure_span(toks('F(a, b)'), 1), narrow)
    assert not should_expand(measure_span(toks('F(a, b)'), 1), wide)
    assert should_expand(measure_span(toks('F(a,\nb)'), 1), wide)


def test_opening_index_for_calls_and_groups():
    tokens = toks('F(x) (y) z')

    assert opening_index(tokens, 0) == 1
    assert opening_index(tokens, 4) == 4
    assert opening_index(tokens, 7) is None


def test_neighbour_queries_skip_newlines():
    tokens = toks('a # c\n\nb')

    assert previous_index(tokens, 4) == 1
    assert previous_index(tokens, 4, skip_comments=True) == 0
    assert previous_index(tokens, 0) is None
    assert next_index(tokens, 2) == 4


def test_trailing_newlines_of_unclosed_span_do_not_count():
    assert not measure_span(toks('F(a, (b\n'), 1).has_newline
    assert measure_span(toks('F(a,\n(b\n'), 1).has_newline
