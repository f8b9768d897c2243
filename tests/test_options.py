import pytest

from exprfmt.options import FormatOptions, FormatOptionsError


def test_defaults():
    opts = FormatOptions()

    assert opts.indent_size == 2
    assert opts.max_line_length == 120
    assert opts.indent_unit == '  '


@pytest.mark.parametrize('kwargs', [
    {'indent_size': 0},
    {'indent_size': -2},
    {'max_line_length': 0},
    {'max_line_length': '80'},
    {'indent_size': True},
    {'indent_size': 2.5},
])
def test_rejects_non_positive_integers(kwargs):
    with pytest.raises(FormatOptionsError):
        FormatOptions(**kwargs)


def test_options_error_is_value_error():
    with pytest.raises(ValueError) as exc:
        FormatOptions(indent_size=0)

    assert 'indent_size must be a positive integer' in str(exc.value)


def test_from_mapping_accepts_editor_keys():
    opts = FormatOptions.from_mapping({'indentSize': 4, 'maxLineLength': 80})

    assert opts == FormatOptions(indent_size=4, max_line_length=80)


def test_from_mapping_fills_unset_and_none_values_with_defaults():
    opts = FormatOptions.from_mapping({'indent_size': 3, 'maxLineLength': None})

    assert opts == FormatOptions(indent_size=3)


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(FormatOptionsError) as exc:
        FormatOptions.from_mapping({'tabs': True})

    assert "unknown format option 'tabs'" in str(exc.value)


def test_options_are_frozen():
    opts = FormatOptions()

    with pytest.raises(AttributeError):
        opts.indent_size = 8
