"""Read-only access to a Markdown documentation tree and its navigation.

This package exposes :class:`DocsProvider`, which resolves paths inside a docs
directory, reads pages with or without their frontmatter, and answers
navigation queries over ``meta.json``. The ``docs`` console script wraps it for
listing and checking a tree from the shell.

Exports
-------
- ``DocsProvider``: accessor over a documentation directory.
- ``DocumentContent``, ``NavigationDescriptor``, ``Section``, ``Page``: typed
  results.
- ``DocsPathError``, ``DocsMetaError``: errors raised for path escapes and,
  in strict mode, unusable ``meta.json`` files.

Examples
--------
>>> from docs_provider import DocsProvider
>>> docs = DocsProvider()
>>> docs.base_path.name
'docs'
>>> docs.find_section("no-such-section") is None
True
"""

from __future__ import annotations

from .models import (
    DocsMetaError,
    DocsPathError,
    DocumentContent,
    NavigationDescriptor,
    Page,
    Section,
)
from .provider import DocsProvider

__all__ = [
    "DocsMetaError",
    "DocsPathError",
    "DocsProvider",
    "DocumentContent",
    "NavigationDescriptor",
    "Page",
    "Section",
]
