"""Shared fixtures for building throwaway documentation trees.

The fixtures create a ``docs`` directory under pytest's ``tmp_path`` and offer
small writer callables so each test declares only the files it cares about.
``meta.json`` payloads are encoded with ``msgspec.json`` to mirror how the
navigation descriptor is produced by tooling.
"""

from __future__ import annotations

import copy
import typing as typ

import msgspec.json as msgspec_json
import pytest

from docs_provider import DocsProvider

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

SAMPLE_META: dict[str, typ.Any] = {
    "sections": [
        {
            "id": "a",
            "title": "Section A",
            "icon": "book",
            "pages": [{"file": "one.md", "title": "One", "slug": "one"}],
        },
        {
            "id": "b",
            "title": "Section B",
            "icon": "code",
            "pages": [{"file": "two.md", "title": "Two", "slug": "two"}],
        },
    ]
}


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Return an empty ``docs`` directory inside ``tmp_path``."""
    root = tmp_path / "docs"
    root.mkdir()
    return root


@pytest.fixture
def write_meta(docs_root: Path) -> cabc.Callable[[typ.Any], Path]:
    """Return a callable that writes ``meta.json`` (bytes/str written verbatim)."""

    def _write(payload: typ.Any) -> Path:
        path = docs_root / "meta.json"
        match payload:
            case bytes():
                path.write_bytes(payload)
            case str():
                path.write_text(payload, encoding="utf-8")
            case _:
                path.write_bytes(msgspec_json.encode(payload))
        return path

    return _write


@pytest.fixture
def write_doc(docs_root: Path) -> cabc.Callable[[str, str], Path]:
    """Return a callable that writes a document at a path relative to the root."""

    def _write(relative: str, text: str) -> Path:
        path = docs_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        return path

    return _write


@pytest.fixture
def provider(docs_root: Path) -> cabc.Iterator[DocsProvider]:
    """Return a provider rooted at ``docs_root``, cleared after the test."""
    docs = DocsProvider(docs_root)
    yield docs
    docs.clear_cache()


@pytest.fixture
def sample_meta() -> dict[str, typ.Any]:
    """Return a fresh copy of the two-section navigation descriptor."""
    return copy.deepcopy(SAMPLE_META)
