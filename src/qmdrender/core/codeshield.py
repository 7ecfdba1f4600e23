"""Code-region stash: hides code from text passes that must not touch it.

Block code is located with markdown-it's own block parser, so indented code
and fences nested in lists or blockquotes are found exactly where the
Markdown stage will later find them. Each region is swapped for a
`\\x02QMDCODE<n>\\x03` token until `unstash_code` puts it back.
"""

import re

from markdown_it import MarkdownIt


STX, ETX = '\x02', '\x03'

CODE_TOKEN_RE = re.compile(rf'{STX}QMDCODE(\d+){ETX}')
INLINE_CODE_RE = re.compile(r'(`+)(?!`).+?(?<!`)\1(?!`)')
_EOL_RE = re.compile(r'(\r\n?|\n)')

_BLOCK_PARSER = MarkdownIt('commonmark')
_CODE_TOKENS = ('fence', 'code_block')


def _lines(text: str) -> list[str]:
    """Split text into lines that keep their terminators, counted as markdown-it counts them."""
    parts = _EOL_RE.split(text)
    return [''.join(parts[i:i + 2]) for i in range(0, len(parts), 2)]


def code_line_ranges(text: str) -> list[tuple[int, int]]:
    """Return [start, end) line ranges of every fenced or indented code block."""
    return [tuple(t.map) for t in _BLOCK_PARSER.parse(text) if t.type in _CODE_TOKENS and t.map]


def stash_code(text: str) -> tuple[str, list[str]]:
    """Replace code blocks and inline code spans with stash tokens.

    Block tokens keep their line ending so the surrounding block structure is
    unchanged. Returns the working text and the stash for `unstash_code`.
    """
    stash: list[str] = []

    def _token(code: str) -> str:
        stash.append(code)
        return f'{STX}QMDCODE{len(stash) - 1}{ETX}'

    lines = _lines(text)
    for start, end in reversed(code_line_ranges(text)):
        last = lines[end - 1]
        eol = last[len(last.rstrip('\r\n')):]
        chunk = ''.join(lines[start:end])
        lines[start:end] = [_token(chunk[:len(chunk) - len(eol)]) + eol]

    text = INLINE_CODE_RE.sub(lambda m: _token(m.group(0)), ''.join(lines))
    return text, stash


def unstash_code(text: str, stash: list[str]) -> str:
    return CODE_TOKEN_RE.sub(lambda m: stash[int(m.group(1))], text)
