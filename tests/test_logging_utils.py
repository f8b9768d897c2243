import logging

import pytest

from exprfmt import format_source
from exprfmt.lexer import strip_eof, tokenize
from exprfmt.logging_utils import _safe_repr, debug_log_call


def test_format_source_logs_entry_and_exit(caplog):
    caplog.set_level(logging.DEBUG, logger="exprfmt")

    format_source("F(a)")

    messages = [record.getMessage() for record in caplog.records]
    assert any(msg.startswith("Entering format_source") for msg in messages)
    assert any(msg.startswith("Exiting format_source") for msg in messages)
    assert any("Formatting 4 token(s)" in msg for msg in messages)


def test_decorator_logs_exceptions_and_reraises(caplog):
    logger = logging.getLogger("exprfmt.tests")
    caplog.set_level(logging.DEBUG, logger="exprfmt.tests")

    @debug_log_call(logger)
    def boom():
        raise RuntimeError("bad")

    with pytest.raises(RuntimeError):
        boom()

    assert any("Exception in" in record.getMessage() for record in caplog.records)


def test_decorator_is_not_applied_twice():
    logger = logging.getLogger("exprfmt.tests")

    def func():
        return 1

    once = debug_log_call(logger)(func)

    assert debug_log_call(logger)(once) is once


def test_safe_repr_truncates_long_sequences():
    rendered = _safe_repr(list(range(20)))

    assert rendered.startswith("[0, 1, 2, 3, 4, ... (20 items)")


def test_safe_repr_summarizes_token_runs():
    tokens = strip_eof(tokenize("F(a,\nb)"))

    rendered = _safe_repr(tokens)

    assert rendered.startswith("<7 tokens on 2 line(s): IDENTIFIER('F')@1:1, LPAREN('(')@1:2")
    assert rendered.endswith(", ...>")


def test_arguments_are_logged_by_name(caplog):
    logger = logging.getLogger("exprfmt.tests")
    caplog.set_level(logging.DEBUG, logger="exprfmt.tests")

    @debug_log_call(logger)
    def render(text, indent=2):
        return text

    render("x", indent=4)

    messages = [record.getMessage() for record in caplog.records]
    assert "Entering" in messages[0]
    assert "text='x', indent=4" in messages[0]
    assert " ms -> 'x'" in messages[-1]
