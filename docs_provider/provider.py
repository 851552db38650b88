"""Read documentation files and navigation metadata from a docs tree.

:class:`DocsProvider` is the single access point to a directory laid out as::

    <base>/
      meta.json                 # navigation descriptor
      <section-id>/<file>.md    # one file per page entry

It resolves relative content paths under the base directory, reads raw
Markdown, strips or parses the frontmatter block, and memoizes ``meta.json`` so
navigation lookups stay in memory after the first load.

Example
-------
>>> from pathlib import Path
>>> from docs_provider import DocsProvider
>>> docs = DocsProvider(Path("docs"))  # doctest: +SKIP
>>> docs.get_all_paths()  # doctest: +SKIP
['guide/introduction.md', 'guide/frontmatter.md', ...]
>>> docs.parse("guide/introduction.md").frontmatter  # doctest: +SKIP
{'title': 'Introduction'}

Missing files, sections, and pages are reported as ``None`` or empty results
rather than exceptions. Operating-system failures other than "not found"
propagate to the caller.
"""

from __future__ import annotations

import collections.abc as cabc
import json
import logging
import os
import threading
import typing as typ
from pathlib import Path

from ._constants import DOCS_DIRNAME, META_FILENAME, PATH_SEPARATOR
from .frontmatter import split_frontmatter, strip_frontmatter
from .models import (
    DocsMetaError,
    DocsPathError,
    DocumentContent,
    NavigationDescriptor,
)

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .config import DocsConfig

logger = logging.getLogger(__name__)

MetaErrorHandler = cabc.Callable[[DocsMetaError], None]


class DocsProvider:
    """Accessor over a documentation directory and its ``meta.json``."""

    def __init__(
        self,
        base_path: Path | str | None = None,
        *,
        strict_meta: bool = False,
        on_meta_error: MetaErrorHandler | None = None,
    ) -> None:
        """Initialize the provider.

        Parameters
        ----------
        base_path : Path or str, optional
            Documentation root. When ``None`` the conventional ``docs``
            directory shipped inside the ``docs_provider`` package is used.
        strict_meta : bool, optional
            Raise :class:`DocsMetaError` when ``meta.json`` is present but
            unusable instead of falling back to an empty descriptor.
        on_meta_error : callable, optional
            Called with the :class:`DocsMetaError` whenever ``meta.json`` is
            present but unusable, before the fallback (or raise) happens.
        """
        self._configured_base_path = Path(base_path) if base_path is not None else None
        self.strict_meta = strict_meta
        self.on_meta_error = on_meta_error
        self._lock = threading.RLock()
        self._base_path: Path | None = None
        self._meta: dict[str, typ.Any] | None = None

    @classmethod
    def from_config(cls, config: DocsConfig, **kwargs: typ.Any) -> DocsProvider:
        """Build a provider from a loaded :class:`~docs_provider.config.DocsConfig`."""
        return cls(config.base_path, strict_meta=config.strict_meta, **kwargs)

    @property
    def base_path(self) -> Path:
        """Absolute documentation root, computed once until :meth:`clear_cache`."""
        with self._lock:
            if self._base_path is None:
                self._base_path = self._compute_base_path()
            return self._base_path

    def _compute_base_path(self) -> Path:
        if self._configured_base_path is None:
            return Path(__file__).resolve().parent / DOCS_DIRNAME
        return Path(os.path.abspath(self._configured_base_path.expanduser()))

    def resolve_path(self, relative_path: str) -> Path:
        """Return the absolute path of ``relative_path`` under :attr:`base_path`.

        Parameters
        ----------
        relative_path : str
            Path within the docs tree, e.g. ``"http/controllers.md"``. Leading
            ``/`` characters are ignored.

        Returns
        -------
        Path
            Normalised absolute path inside the docs tree.

        Raises
        ------
        DocsPathError
            If the normalised path lies outside :attr:`base_path` (for
            example through ``..`` segments).
        """
        base = self.base_path
        trimmed = relative_path.lstrip(PATH_SEPARATOR)
        candidate = Path(os.path.normpath(base / trimmed))
        if candidate != base and base not in candidate.parents:
            msg = f"Documentation path '{relative_path}' resolves outside '{base}'."
            raise DocsPathError(msg)
        return candidate

    get_path = resolve_path

    def exists(self, relative_path: str) -> bool:
        """Return True when ``relative_path`` names a regular file right now."""
        return self.resolve_path(relative_path).is_file()

    def read(self, relative_path: str) -> str | None:
        """Return the full text of a documentation file, or None if missing.

        Newlines are returned exactly as stored on disk. Errors other than the
        file (or one of its parent directories) being absent propagate.
        """
        path = self.resolve_path(relative_path)
        try:
            with path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None

    def read_content(self, relative_path: str) -> str | None:
        """Return a documentation file without its frontmatter block."""
        text = self.read(relative_path)
        if text is None:
            return None
        return strip_frontmatter(text)

    def parse(self, relative_path: str) -> DocumentContent | None:
        """Read a documentation file and split its frontmatter from the body.

        Parameters
        ----------
        relative_path : str
            Path within the docs tree.

        Returns
        -------
        DocumentContent or None
            Parsed ``key: "value"`` entries and the remaining content, or
            ``None`` when the file does not exist. Files without frontmatter
            yield an empty mapping and their full text.
        """
        text = self.read(relative_path)
        if text is None:
            return None
        frontmatter, content = split_frontmatter(text)
        return DocumentContent(frontmatter=frontmatter, content=content)

    def get_meta(self) -> dict[str, typ.Any]:
        """Return the decoded ``meta.json`` document, loading it on first use.

        Returns
        -------
        dict[str, Any]
            The cached descriptor mapping. Missing, undecodable, or non-object
            ``meta.json`` files yield ``{}``; the result is cached either way
            until :meth:`clear_cache` is called.

        Raises
        ------
        DocsMetaError
            Only when ``strict_meta`` is enabled and ``meta.json`` is present
            but unusable. Nothing is cached in that case.
        """
        with self._lock:
            if self._meta is None:
                self._meta = self._load_meta()
            return self._meta

    def _load_meta(self) -> dict[str, typ.Any]:
        path = self.resolve_path(META_FILENAME)
        try:
            raw = self._read_meta(path)
            if raw is None:
                logger.debug(
                    "No %s under %s; using empty navigation",
                    META_FILENAME,
                    self.base_path,
                )
                return {}
            payload = _decode_meta(raw, path)
        except DocsMetaError as exc:
            self._report_meta_error(exc)
            return {}
        logger.debug("Loaded %s from %s", META_FILENAME, self.base_path)
        return payload

    def _read_meta(self, path: Path) -> str | None:
        try:
            return self.read(META_FILENAME)
        except UnicodeDecodeError as exc:
            msg = f"Navigation file '{path}' is not valid UTF-8: {exc}"
            raise DocsMetaError(msg) from exc

    def _report_meta_error(self, error: DocsMetaError) -> None:
        logger.warning("%s", error)
        if self.on_meta_error is not None:
            self.on_meta_error(error)
        if self.strict_meta:
            raise error

    def get_sections(self) -> list[dict[str, typ.Any]]:
        """Return the raw ``sections`` list from ``meta.json`` (empty if absent)."""
        return self.get_meta().get("sections") or []

    def navigation(self) -> NavigationDescriptor:
        """Return a typed view of the navigation descriptor."""
        return NavigationDescriptor.from_mapping(self.get_meta())

    def find_section(self, section_id: str) -> dict[str, typ.Any] | None:
        """Return the first section whose ``id`` equals ``section_id``."""
        for section in self.get_sections():
            if section["id"] == section_id:
                return section
        return None

    def find_page(self, section_id: str, slug: str) -> dict[str, typ.Any] | None:
        """Return the page with ``slug`` inside ``section_id``, or None."""
        section = self.find_section(section_id)
        if section is None:
            return None
        for page in section["pages"]:
            if page["slug"] == slug:
                return page
        return None

    def read_page(self, section_id: str, slug: str) -> DocumentContent | None:
        """Parse the file behind a navigation entry, or None if either is missing."""
        page = self.find_page(section_id, slug)
        if page is None:
            return None
        return self.parse(f"{section_id}{PATH_SEPARATOR}{page['file']}")

    def get_all_paths(self) -> list[str]:
        """Return ``<section-id>/<file>`` for every page, in navigation order."""
        return [
            f"{section['id']}{PATH_SEPARATOR}{page['file']}"
            for section in self.get_sections()
            for page in section["pages"]
        ]

    def clear_cache(self) -> None:
        """Forget the cached base path and descriptor so both are recomputed."""
        with self._lock:
            self._meta = None
            self._base_path = None
        logger.debug("Cleared docs provider caches")


def _reject_constant(name: str) -> typ.NoReturn:
    msg = f"non-standard JSON constant {name!r}"
    raise ValueError(msg)


def _decode_meta(raw: str, path: Path) -> dict[str, typ.Any]:
    """Decode ``meta.json`` text, raising DocsMetaError for unusable payloads.

    Only standard JSON is accepted, so ``NaN`` and ``Infinity`` are rejected.
    """
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        msg = f"Navigation file '{path}' is not valid JSON: {exc}"
        raise DocsMetaError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Navigation file '{path}' must contain a JSON object."
        raise DocsMetaError(msg)
    return payload


__all__ = ["DocsProvider", "MetaErrorHandler"]
