r"""Strip and parse the flat frontmatter block at the top of Markdown pages.

Documentation pages may open with a small metadata block delimited by lines of
three hyphens. Only single-line ``key: "value"`` entries are understood; this
is deliberately not a YAML parser, and any other line inside the block is
ignored while still being removed from the body.

Example
-------
>>> from docs_provider.frontmatter import split_frontmatter, strip_frontmatter
>>> text = '---\ntitle: "Routing"\n---\n# Routing\n'
>>> split_frontmatter(text)
({'title': 'Routing'}, '# Routing\n')
>>> strip_frontmatter(text)
'# Routing\n'
"""

from __future__ import annotations

import re

STRIP_PATTERN = re.compile(r"\A---\s*\n.*?\n---\s*\n", re.DOTALL)
BLOCK_PATTERN = re.compile(r"\A---\s*\n(.+?)\n---\s*\n(.*)\Z", re.DOTALL)
ENTRY_PATTERN = re.compile(r'^(\w+):\s*"(.+)"$', re.ASCII)
ESCAPE_PATTERN = re.compile(r"\\(.?)", re.DOTALL)


def _unescape_match(match: re.Match[str]) -> str:
    escaped = match.group(1)
    return "\0" if escaped == "0" else escaped


def unescape_value(value: str) -> str:
    r"""Resolve backslash escapes in a quoted frontmatter value.

    Every backslash is dropped and the character it escapes is kept, so
    ``\"`` becomes ``"`` and ``\\`` becomes ``\``. ``\0`` is the one exception
    and becomes a NUL character. A lone trailing backslash is removed.
    """
    return ESCAPE_PATTERN.sub(_unescape_match, value)


def _parse_entries(block: str) -> dict[str, str]:
    """Return accepted ``key: "value"`` pairs from a raw frontmatter block."""
    entries: dict[str, str] = {}
    for line in block.split("\n"):
        match = ENTRY_PATTERN.match(line.strip())
        if match is None:
            continue
        entries[match.group(1)] = unescape_value(match.group(2))
    return entries


def strip_frontmatter(text: str) -> str:
    """Remove a leading frontmatter block, returning the rest unchanged.

    Parameters
    ----------
    text : str
        Raw Markdown file contents.

    Returns
    -------
    str
        ``text`` without its frontmatter block (delimiters included). Text
        that does not open with a recognisable block is returned as-is.
    """
    return STRIP_PATTERN.sub("", text, count=1)


def split_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split Markdown into parsed frontmatter entries and body content.

    Parameters
    ----------
    text : str
        Raw Markdown file contents.

    Returns
    -------
    tuple[dict[str, str], str]
        The accepted frontmatter entries and the content following the closing
        delimiter. When no block is found the mapping is empty and the content
        is the original ``text``. Lines that do not match the quoted scalar
        grammar are skipped; a repeated key keeps its last value.
    """
    match = BLOCK_PATTERN.match(text)
    if match is None:
        return {}, text
    return _parse_entries(match.group(1)), match.group(2)


__all__ = [
    "BLOCK_PATTERN",
    "ENTRY_PATTERN",
    "STRIP_PATTERN",
    "split_frontmatter",
    "strip_frontmatter",
    "unescape_value",
]
