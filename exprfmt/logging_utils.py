from __future__ import annotations

import inspect
import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxstring = 80
_repr.maxother = 160
_repr.maxlist = 10
_repr.maxtuple = 10

_TOKEN_FIELDS = ("kind", "text", "line", "col")


def _is_token(value: Any) -> bool:
    return all(hasattr(value, field) for field in _TOKEN_FIELDS)


def _token_repr(token: Any) -> str:
    return f"{token.kind}({token.text!r})@{token.line}:{token.col}"


def _token_run_repr(tokens: Sequence[Any]) -> str:
    lines = {token.line for token in tokens}
    head = ", ".join(_token_repr(token) for token in tokens[:3])
    more = ", ..." if len(tokens) > 3 else ""
    return f"<{len(tokens)} tokens on {len(lines)} line(s): {head}{more}>"


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    if _is_token(value):
        return _token_repr(value)

    if isinstance(value, (list, tuple)):
        if value and all(_is_token(item) for item in value):
            return _token_run_repr(value)
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append(f"... ({len(value)} items)")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    if isinstance(value, str) and "\n" in value:
        lines = value.count("\n")
        return f"{_repr.repr(value)} ({len(value)} chars, {lines} newline(s))"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - defensive
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _bind_arguments(func: Callable[..., Any], args: Sequence[Any], kwargs: Dict[str, Any]) -> str:
    """Render call arguments as ``name=value`` pairs, in signature order."""

    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except (TypeError, ValueError):
        pairs = [_safe_repr(arg) for arg in args]
        pairs.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    else:
        pairs = [f"{key}={_safe_repr(value)}" for key, value in bound.arguments.items()]
    return ", ".join(pairs) or "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator logging entry, exit and elapsed time at DEBUG level.

    Arguments are bound to the wrapped function's parameter names. Token
    sequences are summarized rather than dumped; pass ``log_result=False``
    when the return value is itself large.
    """

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _bind_arguments(func, args, kwargs))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            if log_result:
                logger.debug("Exiting %s in %.2f ms -> %s", qualname, elapsed_ms, _safe_repr(result))
            else:
                logger.debug("Exiting %s in %.2f ms", qualname, elapsed_ms)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator
