"""File discovery and flat front matter extraction"""

import re
from pathlib import Path

from qmdrender.core.models import Document, FrontMatter


FRONTMATTER_RE = re.compile(r'\A---\r?\n(?:(.*?)\r?\n)?---\r?\n', re.DOTALL)
QMD_EXTENSIONS = {'.qmd'}
_QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    """Drop one matching pair of surrounding single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _parse_block(block: str) -> dict[str, str]:
    """Parse flat `key: value` lines; lines without a usable colon are skipped."""
    metadata: dict[str, str] = {}
    for line in block.splitlines():
        colon = line.find(':')
        if colon <= 0:
            continue
        key = line[:colon].strip()
        metadata[key] = _unquote(line[colon + 1:].strip())
    return metadata


def extract_front_matter(text: str) -> FrontMatter:
    """Split a leading ---/--- block from text and parse it.

    Without a complete block the metadata is empty and the body is the
    untouched input.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return FrontMatter(metadata={}, body=text)
    return FrontMatter(metadata=_parse_block(m.group(1) or ''), body=text[m.end():])


def discover_files(path: Path) -> list[Path]:
    """Return sorted .qmd files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix.lower() in QMD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix.lower() in QMD_EXTENSIONS)


def read_document(path: Path) -> Document:
    """Read a QMD file as UTF-8 into a Document."""
    return Document(raw_text=path.read_text(encoding='utf-8'), path=path)
