"""Integration tests for the render and meta commands"""

import json

from typer.testing import CliRunner

from qmdrender.cli.cli import app


runner = CliRunner()


def test_cli_help():
    """--help lists the commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "render" in result.output
    assert "meta" in result.output


def test_render_cmd_writes_outputs(tmp_path, monkeypatch):
    """render produces .html and .json files for each document."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "hello.qmd").write_text("---\ntitle: Hello\n---\nWorld $x$\n")

    result = runner.invoke(app, ["render", "hello.qmd", "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "Rendered 1 document(s)" in result.output
    assert "<math" in (tmp_path / "dist" / "hello.html").read_text()
    assert json.loads((tmp_path / "dist" / "hello.json").read_text())["title"] == "Hello"


def test_render_cmd_stdout_tex(tmp_path, monkeypatch):
    """--stdout prints the fragment; --math-output tex keeps delimiters."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "doc.qmd").write_text("Value $a_b$\n")

    result = runner.invoke(app, ["render", "doc.qmd", "--stdout", "--math-output", "tex"])

    assert result.exit_code == 0, result.output
    assert '<div class="qmd-rendered">' in result.output
    assert "$a_b$" in result.output
    assert not (tmp_path / "dist").exists()


def test_render_cmd_no_files(tmp_path, monkeypatch):
    """A directory without .qmd files exits 1."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["render", str(tmp_path)])
    assert result.exit_code == 1


def test_render_cmd_bad_math_output(tmp_path, monkeypatch):
    """An invalid setting is reported, not raised."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "doc.qmd").write_text("x\n")
    result = runner.invoke(app, ["render", "doc.qmd", "--math-output", "svg"])
    assert result.exit_code == 1


def test_meta_cmd(tmp_path):
    """meta prints the front matter as JSON."""
    f = tmp_path / "doc.qmd"
    f.write_text("---\ntitle: 'Quoted'\nauthor: Me\n---\nBody\n")
    result = runner.invoke(app, ["meta", str(f)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"title": "Quoted", "author": "Me"}


def test_meta_cmd_missing_file(tmp_path):
    """meta fails cleanly on a missing path."""
    result = runner.invoke(app, ["meta", str(tmp_path / "nope.qmd")])
    assert result.exit_code == 1
