"""markdown-it parser construction and Pygments code highlighting"""

import logging

import pygments
from markdown_it import MarkdownIt
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound


logger = logging.getLogger(__name__)

_FORMATTER = HtmlFormatter(nowrap=True)


def _lang_name(lang: str) -> str:
    """Normalise a fence hint; Quarto cells are written as {python}."""
    return lang.strip().strip('{}').split(',')[0].strip().lower()


def highlight_code(code: str, lang: str = '', attrs: str = '') -> str:
    """Highlight a fenced code block for markdown-it.

    Looks the lexer up by name, falls back to guessing from the code, and
    returns "" when both fail so markdown-it emits the escaped source.
    """
    name = _lang_name(lang) if lang else ''
    lexer = None
    if name:
        try:
            lexer = get_lexer_by_name(name)
        except ClassNotFound:
            logger.debug("No lexer for %r; guessing", name)
    if lexer is None:
        try:
            lexer = guess_lexer(code)
        except ClassNotFound:
            return ''
    return pygments.highlight(code, lexer, _FORMATTER)


def make_parser(preset: str = 'gfm-like', breaks: bool = True, highlight: bool = True) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    options = {"linkify": False, "html": True, "breaks": breaks}
    if highlight:
        options["highlight"] = highlight_code
    return MarkdownIt(preset, options_update=options)
