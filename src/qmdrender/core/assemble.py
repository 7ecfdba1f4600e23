"""Final fragment assembly: escaped metadata header plus rendered body"""

from html import escape

from qmdrender.core.models import RenderedFragment


def render_metadata_header(metadata: dict[str, str]) -> str:
    """Return the metadata header, or "" when there is no metadata.

    Only title, author and date are shown; each is HTML-escaped since it is
    untrusted document text.
    """
    if not metadata:
        return ''
    parts = ['<div class="qmd-metadata">']
    if metadata.get('title'):
        parts.append(f'<h1 class="qmd-title">{escape(metadata["title"])}</h1>')
    if metadata.get('author'):
        parts.append(f'<p class="qmd-author">By {escape(metadata["author"])}</p>')
    if metadata.get('date'):
        parts.append(f'<p class="qmd-date">{escape(metadata["date"])}</p>')
    parts.append('</div>')
    return ''.join(parts)


def assemble_document(metadata: dict[str, str], body_html: str, math_blocks: int = 0) -> RenderedFragment:
    """Combine the metadata header with the rendered body; the body is not re-escaped."""
    html = (
        '<div class="qmd-rendered">'
        + render_metadata_header(metadata)
        + f'<div class="qmd-content">{body_html}</div>'
        + '</div>'
    )
    return RenderedFragment(
        html=html,
        metadata=dict(metadata),
        title=metadata.get('title') or None,
        author=metadata.get('author') or None,
        date=metadata.get('date') or None,
        math_blocks=math_blocks,
    )
