"""Output writing: HTML fragment or standalone page, plus sidecar JSON"""

import json
from html import escape
from pathlib import Path

from qmdrender.core.models import RenderedFragment


def build_page(fragment: RenderedFragment) -> str:
    """Wrap a fragment in a minimal standalone HTML page."""
    title = escape(fragment.title or "Untitled")
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{title}</title>\n"
        "</head>\n"
        "<body>\n"
        f"{fragment.html}\n"
        "</body>\n"
        "</html>\n"
    )


def build_sidecar(fragment: RenderedFragment, source: Path) -> dict:
    """Build the sidecar JSON dict: source, front matter, heading fields, math count."""
    return {
        "source": source.as_posix(),
        "metadata": fragment.metadata,
        "title": fragment.title,
        "author": fragment.author,
        "date": fragment.date,
        "math_blocks": fragment.math_blocks,
    }


def write_fragment(
    fragment: RenderedFragment,
    source: Path,
    output_dir: Path,
    standalone: bool = False,
    ) -> tuple[Path, Path]:
    """Write HTML + sidecar JSON for a single document.

    source is relative to the render root, so the output mirrors its layout:
      output_dir / source.parent / source.stem.{html|json}

    Returns (html_path, json_path).
    """
    dest_dir = output_dir / source.parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    html_path = dest_dir / f"{source.stem}.html"
    json_path = dest_dir / f"{source.stem}.json"

    html_path.write_text(build_page(fragment) if standalone else fragment.html, encoding='utf-8')
    json_path.write_text(
        json.dumps(build_sidecar(fragment, source), indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return html_path, json_path
