"""Math protection and restoration around Markdown conversion.

Math regions are swapped for opaque placeholder tokens before the Markdown
renderer sees the text, and swapped back into the rendered HTML afterwards.
Tokens are framed by STX/ETX control characters, which Markdown never
produces and never treats as syntax, so the renderer passes them through
as a single unsplittable word.

Scan order is fixed: display math, then inline math, then named LaTeX
environments. No math region may contain a placeholder, so an outer match
can never swallow a region that an earlier pass already protected.
"""

import html
import logging
import re

from qmdrender.core.codeshield import ETX, STX, stash_code, unstash_code
from qmdrender.core.models import MathBlock


logger = logging.getLogger(__name__)

MATH_ENVIRONMENTS = ('equation', 'align', 'gather', 'flalign', 'multline', 'alignat', 'split')

_NO_TOKEN = rf'(?:(?!{STX})[\s\S])'

DISPLAY_MATH_RE = re.compile(rf'(?<!\\)\$\${_NO_TOKEN}+?(?<!\\)\$\$')
INLINE_MATH_RE = re.compile(rf'(?<!\\)\$(?:\\\$|[^$\n{STX}])+?(?<!\\)\$')
ENVIRONMENT_RE = re.compile(
    r'\\begin\{((?:' + '|'.join(MATH_ENVIRONMENTS) + r')\*?)\}'
    + _NO_TOKEN + r'*?\\end\{\1\}'
)
PLACEHOLDER_RE = re.compile(rf'{STX}QMDMATH(\d+){ETX}')

ESCAPED_DOLLAR_RE = re.compile(r'\\\$')
ESCAPED_DOLLAR_HTML = '<span class="qmd-dollar">$</span>'


def placeholder(index: int) -> str:
    """Return the placeholder token for math block `index`."""
    return f'{STX}QMDMATH{index}{ETX}'


def protect_math(body: str) -> tuple[str, list[MathBlock]]:
    """Replace every math region in body with a placeholder token.

    Returns the working text and the protected blocks, indexed in order of
    detection. Environments are stored wrapped in `$$...$$` so they render
    as display math. Unterminated delimiters are left as literal text.
    """
    blocks: list[MathBlock] = []

    def _protect(wrap: bool):
        def _sub(m: re.Match) -> str:
            original = f'$${m.group(0)}$$' if wrap else m.group(0)
            blocks.append(MathBlock(index=len(blocks), original_text=original))
            return placeholder(len(blocks) - 1)
        return _sub

    text = body.replace(STX, '').replace(ETX, '')
    text, stash = stash_code(text)
    text = DISPLAY_MATH_RE.sub(_protect(wrap=False), text)
    text = INLINE_MATH_RE.sub(_protect(wrap=False), text)
    text = ENVIRONMENT_RE.sub(_protect(wrap=True), text)
    text = ESCAPED_DOLLAR_RE.sub(ESCAPED_DOLLAR_HTML, text)
    text = unstash_code(text, stash)

    logger.debug("Protected %d math block(s), %d code region(s)", len(blocks), len(stash))
    return text, blocks


def restore_math(html_text: str, blocks: list[MathBlock], escape: bool = False) -> str:
    """Put each block's original text back in place of its placeholder token.

    Restoration is a single pass, so no token is ever restored twice. With
    `escape=True` the math is HTML-escaped so that the parsed document text,
    rather than the markup, equals the original source.
    """
    def _restore(m: re.Match) -> str:
        index = int(m.group(1))
        assert index < len(blocks), f"placeholder {index} has no math block ({len(blocks)} protected)"
        if index >= len(blocks):  # reachable only under python -O
            logger.error("Placeholder index %d out of range; left in place", index)
            return m.group(0)
        text = blocks[index].original_text
        return html.escape(text, quote=False) if escape else text

    return PLACEHOLDER_RE.sub(_restore, html_text)
