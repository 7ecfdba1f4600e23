"""Unit tests for core/latex.py"""

import pytest

from qmdrender.core.latex import NOISE_COMMANDS, strip_latex_noise


@pytest.mark.parametrize("command", NOISE_COMMANDS)
def test_strip_removes_command_and_trailing_whitespace(command):
    """Each noise command goes, along with the whitespace after it."""
    assert strip_latex_noise(f"Before\n\\{command}  \n\nAfter") == "Before\nAfter"


def test_strip_removes_every_occurrence():
    """All occurrences are removed, not just the first."""
    assert strip_latex_noise("a\\newpage b\\newpage c\\pagebreak") == "abc"


@pytest.mark.parametrize("text", [
    "\\newpagex",
    "\\noindentation",
    "\\clearpages",
    "\\newline",
    "newpage without backslash",
])
def test_strip_matches_whole_command_names_only(text):
    """Longer command names sharing a prefix are left alone."""
    assert strip_latex_noise(text) == text


def test_strip_is_idempotent_after_splice():
    """A removal that splices a new command together is stripped too."""
    once = strip_latex_noise("x \\clear\\newpage page")
    assert once == "x "
    assert strip_latex_noise(once) == once


@pytest.mark.parametrize("text", [
    "# Title\n\n\\noindent Text\n\n\\newpage\n## Next\n",
    "\\cleardoublepage\\clearpage",
    "plain text",
])
def test_strip_twice_equals_strip_once(text):
    """Running the stripper on stripped text changes nothing."""
    once = strip_latex_noise(text)
    assert strip_latex_noise(once) == once
