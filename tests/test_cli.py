import pytest

import exprfmt.__main__ as cli


def write_source(tmp_path, text):
    path = tmp_path / "rule.expr"
    path.write_text(text, encoding="utf-8")
    return path


def test_main_prints_formatted_text(tmp_path, capsys):
    path = write_source(tmp_path, "F(a,\nb)")

    cli.main([str(path)])

    assert capsys.readouterr().out == "F(\n  a,\n  b\n)\n"


def test_main_passes_options(tmp_path, capsys):
    path = write_source(tmp_path, "F(aaaaaaaaaa, bbbbbbbbbb)")

    cli.main([str(path), "--indent-size", "4", "--max-line-length", "20"])

    assert capsys.readouterr().out == "F(\n    aaaaaaaaaa,\n    bbbbbbbbbb\n)\n"


def test_main_writes_output_file(tmp_path, capsys):
    path = write_source(tmp_path, "a\n\n\nb")
    output = tmp_path / "out" / "rule.expr"

    cli.main([str(path), "--output", str(output)])

    assert output.read_text(encoding="utf-8") == "a\n\nb\n"
    assert capsys.readouterr().out == ""


def test_check_mode(tmp_path, capsys):
    clean = write_source(tmp_path, "a - 1\n")
    cli.main([str(clean), "--check"])

    dirty = tmp_path / "dirty.expr"
    dirty.write_text("a-1", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        cli.main([str(dirty), "--check"])

    assert exc.value.code == 1
    assert "not formatted" in capsys.readouterr().out


def test_missing_file_exits_non_zero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([str(tmp_path / "missing.expr")])

    assert exc.value.code == 1
    assert capsys.readouterr().out == ""


def test_invalid_indent_size_exits_non_zero(tmp_path, capsys):
    path = write_source(tmp_path, "a")

    with pytest.raises(SystemExit) as exc:
        cli.main([str(path), "--indent-size", "0"])

    assert exc.value.code == 1
    assert capsys.readouterr().out == ""


def test_main_uses_format_source(tmp_path, monkeypatch, capsys):
    path = write_source(tmp_path, "anything")
    calls = []

    def _format(text, options):
        calls.append((text, options.indent_size, options.max_line_length))
        return "formatted\n"

    monkeypatch.setattr(cli, "format_source", _format)

    cli.main([str(path)])

    assert calls == [("anything", 2, 120)]
    assert capsys.readouterr().out == "formatted\n"
