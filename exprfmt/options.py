from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

DEFAULT_INDENT_SIZE = 2
DEFAULT_MAX_LINE_LENGTH = 120

# editor settings use camelCase keys
_KEY_ALIASES = {
    'indentSize': 'indent_size',
    'indent_size': 'indent_size',
    'maxLineLength': 'max_line_length',
    'max_line_length': 'max_line_length',
}


class FormatOptionsError(ValueError):
    pass


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatOptionsError(f'{name} must be a positive integer, got {value!r}')
    if value <= 0:
        raise FormatOptionsError(f'{name} must be a positive integer, got {value}')


@dataclass(frozen=True)
class FormatOptions:
    """Layout settings for one formatting call.

    ``max_line_length`` only triggers expansion of calls and groups; lines are
    never wrapped inside a token to honour it.
    """

    indent_size: int = DEFAULT_INDENT_SIZE
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    def __post_init__(self) -> None:
        for f in fields(self):
            _require_positive_int(f.name, getattr(self, f.name))

    @property
    def indent_unit(self) -> str:
        return ' ' * self.indent_size

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "FormatOptions":
        values = {}
        for key, value in mapping.items():
            target = _KEY_ALIASES.get(key)
            if target is None:
                raise FormatOptionsError(f'unknown format option {key!r}')
            if value is None:
                continue
            values[target] = value
        return cls(**values)
