"""Render $$...$$ and $...$ in an HTML fragment to MathML.

Walks the text nodes of the fragment, the way a client-side auto-render
pass would, and converts each delimited expression with latex2mathml. A
malformed expression never aborts the pass: it is replaced by an error
span holding the original source.
"""

import logging
import re

import latex2mathml.converter
from bs4 import BeautifulSoup, NavigableString


logger = logging.getLogger(__name__)

MATH_DELIMITERS_RE = re.compile(
    r'\$\$(?P<display>[\s\S]+?)\$\$'
    r'|\$(?P<inline>(?:\\\$|[^$\n])+?)(?<!\\)\$'
)
SKIP_TAGS = {'script', 'noscript', 'style', 'textarea', 'pre', 'code', 'option', 'math'}
TEX_ENCODING = 'application/x-tex'


def _skipped(node) -> bool:
    return any(parent.name in SKIP_TAGS for parent in node.parents)


def _math_element(soup: BeautifulSoup, tex: str, display: bool):
    """Convert tex to a <math> element carrying its source as an annotation."""
    mathml = latex2mathml.converter.convert(tex, display='block' if display else 'inline')
    math = BeautifulSoup(mathml, 'html.parser').find('math')
    if math is None:
        raise ValueError(f"latex2mathml produced no <math> element for {tex!r}")
    children = [c.extract() for c in list(math.contents)]
    semantics = soup.new_tag('semantics')
    if len(children) == 1:
        semantics.append(children[0])
    else:
        row = soup.new_tag('mrow')
        for child in children:
            row.append(child)
        semantics.append(row)
    annotation = soup.new_tag('annotation', attrs={'encoding': TEX_ENCODING})
    annotation.string = tex
    semantics.append(annotation)
    math.append(semantics)
    math['class'] = 'qmd-math qmd-math-display' if display else 'qmd-math qmd-math-inline'
    return math


def _error_element(soup: BeautifulSoup, source: str, error: Exception):
    span = soup.new_tag('span', attrs={'class': 'qmd-math-error', 'title': str(error) or type(error).__name__})
    span.string = source
    return span


def _render_node(soup: BeautifulSoup, node: NavigableString) -> int:
    """Replace node with text and math pieces; returns expressions rendered."""
    text = str(node)
    pieces = []
    last = 0
    for m in MATH_DELIMITERS_RE.finditer(text):
        if m.start() > last:
            pieces.append(NavigableString(text[last:m.start()]))
        display = m.group('display') is not None
        tex = (m.group('display') if display else m.group('inline')).strip()
        try:
            pieces.append(_math_element(soup, tex, display))
        except Exception as e:
            logger.warning("Math error in %r: %s", m.group(0), e)
            pieces.append(_error_element(soup, m.group(0), e))
        last = m.end()
    if not pieces:
        return 0
    if last < len(text):
        pieces.append(NavigableString(text[last:]))
    node.replace_with(*pieces)
    return sum(1 for p in pieces if not isinstance(p, NavigableString))


def render_math(html: str) -> str:
    """Render every delimited math expression in html outside code and scripts."""
    soup = BeautifulSoup(html, 'html.parser')
    nodes = [
        n for n in soup.find_all(string=MATH_DELIMITERS_RE)
        if type(n) is NavigableString and not _skipped(n)
    ]
    rendered = sum(_render_node(soup, n) for n in nodes)
    logger.debug("Rendered %d math expression(s)", rendered)
    return str(soup)


def keep_tex(html: str) -> str:
    """Leave math delimiters in place for a client-side renderer."""
    return html
