"""Render pipeline: stage ordering for a single document and batch rendering"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from qmdrender.config import Settings
from qmdrender.core.assemble import assemble_document
from qmdrender.core.callouts import translate_callouts
from qmdrender.core.export import write_fragment
from qmdrender.core.latex import strip_latex_noise
from qmdrender.core.markdown import make_parser
from qmdrender.core.mathblocks import protect_math, restore_math
from qmdrender.core.mathrender import keep_tex, render_math
from qmdrender.core.models import RenderedFragment
from qmdrender.core.parse import discover_files, extract_front_matter, read_document


logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """A document could not be rendered."""


@dataclass(frozen=True)
class Renderers:
    """External collaborators: Markdown text -> HTML, and HTML -> HTML with math rendered."""
    markdown: Optional[Callable[[str], str]]
    math:     Optional[Callable[[str], str]]


def build_renderers(settings: Settings) -> Renderers:
    """Wire markdown-it and the math pass according to settings."""
    parser = make_parser(settings.parser_config, breaks=settings.breaks, highlight=settings.highlight)
    return Renderers(
        markdown=parser.render,
        math=render_math if settings.math_output == "mathml" else keep_tex,
    )


def render_document(raw_text: str, renderers: Renderers) -> RenderedFragment:
    """Render one QMD document to an HTML fragment.

    Math is protected before Markdown conversion and restored after it;
    everything the Markdown renderer sees between those two steps holds
    only placeholder tokens where math used to be.
    """
    if renderers.markdown is None:
        raise RenderError("No Markdown renderer configured")
    if renderers.math is None:
        raise RenderError("No math renderer configured")

    front = extract_front_matter(raw_text)
    text = strip_latex_noise(front.body)
    text, blocks = protect_math(text)
    text = translate_callouts(text)

    try:
        html = renderers.markdown(text)
    except Exception as e:
        raise RenderError(f"Markdown rendering failed: {e}") from e

    html = restore_math(html, blocks, escape=True)

    try:
        html = renderers.math(html)
    except Exception:
        logger.warning("Math rendering failed; leaving delimiters as text", exc_info=True)

    return assemble_document(front.metadata, html, math_blocks=len(blocks))


def run_render(path: str, settings: Settings) -> list[tuple[Path, Path]]:
    """Render path (file or directory) into settings.output_dir. Returns (source, html_file) pairs."""
    root = Path(path)
    output_dir = Path(settings.output_dir)
    renderers = build_renderers(settings)
    results = []
    for p in discover_files(root):
        try:
            fragment = render_document(read_document(p).raw_text, renderers)
            rel = p.relative_to(root) if root.is_dir() else Path(p.name)
            html_path, _ = write_fragment(fragment, rel, output_dir, standalone=settings.standalone)
            results.append((p, html_path))
        except Exception as e:
            raise RenderError(f"Failed to render {p}: {e}") from e
    return results
