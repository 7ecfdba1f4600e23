"""Removal of layout-only LaTeX commands with no HTML counterpart"""

import re


NOISE_COMMANDS = ('newpage', 'pagebreak', 'clearpage', 'cleardoublepage', 'noindent')

# (?![A-Za-z]) keeps \newpagex or \noindentation from matching a prefix.
NOISE_RE = re.compile(r'\\(?:' + '|'.join(NOISE_COMMANDS) + r')(?![A-Za-z])\s*')


def strip_latex_noise(text: str) -> str:
    """Remove every noise command together with its trailing whitespace.

    Repeats until nothing matches, since a removal can splice two fragments
    into a fresh command (e.g. `\\clear\\newpage page`).
    """
    stripped = NOISE_RE.sub('', text)
    while stripped != text:
        text, stripped = stripped, NOISE_RE.sub('', stripped)
    return stripped
