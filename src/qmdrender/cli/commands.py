"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from qmdrender.config import Settings, load_config
from qmdrender.core.export import build_page
from qmdrender.core.parse import discover_files, extract_front_matter, read_document
from qmdrender.core.pipeline import RenderError, build_renderers, render_document, run_render


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(settings: Settings, verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else (logging.INFO if verbose else settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def render_cmd(
    path: Annotated[str, typer.Argument(help="QMD file or directory to render")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    math_output: Annotated[Optional[str], typer.Option("--math-output", help="mathml or tex")] = None,
    no_highlight: Annotated[bool, typer.Option("--no-highlight", help="Skip Pygments highlighting")] = False,
    standalone: Annotated[bool, typer.Option("--standalone", help="Write full HTML pages")] = False,
    stdout: Annotated[bool, typer.Option("--stdout", help="Print a single file's HTML instead of writing")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Log pipeline internals")] = False,
    ):
    """Render QMD documents to HTML fragments with a sidecar JSON."""
    settings = _settings(overrides={
        "output_dir": out, "parser_config": parser, "math_output": math_output,
        "highlight": False if no_highlight else None,
        "standalone": True if standalone else None,
    })
    _configure_logging(settings, verbose, debug)

    if stdout:
        files = discover_files(Path(path))
        if len(files) != 1:
            _fail(f"--stdout needs exactly one .qmd file, found {len(files)}")
        try:
            fragment = render_document(read_document(files[0]).raw_text, build_renderers(settings))
        except RenderError as e:
            _fail(str(e))
        typer.echo(build_page(fragment) if settings.standalone else fragment.html)
        return

    try:
        results = run_render(path, settings)
    except RenderError as e:
        _fail(str(e), e.__cause__)
    if not results:
        typer.echo(f"No .qmd files found at {path}.")
        raise typer.Exit(1)
    for src, html_path in results:
        typer.echo(f"  {src} -> {html_path}")
    typer.echo(f"Rendered {len(results)} document(s) to {settings.output_dir}/")


def meta_cmd(
    path: Annotated[str, typer.Argument(help="QMD file to inspect")],
    ):
    """Print a document's front matter as JSON."""
    p = Path(path)
    if not p.is_file():
        _fail(f"Not a file: {path}")
    front = extract_front_matter(read_document(p).raw_text)
    typer.echo(json.dumps(front.metadata, indent=2, ensure_ascii=False))
