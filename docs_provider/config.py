"""Load docs provider settings from a YAML file.

The file is optional; the CLI and embedding applications use it to point the
provider at a documentation tree other than the conventional ``docs``
directory and to opt into strict ``meta.json`` handling.

Examples
--------
A ``docs.yaml`` beside the documentation tree::

    base_path: docs
    strict_meta: true

>>> from pathlib import Path
>>> from docs_provider.config import load_docs_config
>>> config = load_docs_config(Path("docs.yaml"))  # doctest: +SKIP
>>> config.base_path  # doctest: +SKIP
PosixPath('/srv/site/docs')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML


class DocsConfigError(ValueError):
    """Raised when the docs configuration contains invalid values."""


@dc.dataclass(slots=True)
class DocsConfig:
    """Resolved docs provider settings.

    Attributes
    ----------
    base_path : Path | None
        Documentation root, absolute when loaded from a file. ``None`` keeps
        the provider's conventional location.
    strict_meta : bool
        Raise on a present but unusable ``meta.json`` instead of treating it
        as empty.
    """

    base_path: Path | None = None
    strict_meta: bool = False


def load_docs_config(path: Path) -> DocsConfig:
    """Load the YAML configuration describing where the docs tree lives.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML file (for example, ``docs.yaml``).
        A relative ``base_path`` inside it resolves against the file's
        directory.

    Returns
    -------
    DocsConfig
        Parsed settings with defaults applied for missing keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    DocsConfigError
        If ``base_path`` is not a non-empty string or ``strict_meta`` is not
        a boolean.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return DocsConfig(
        base_path=_resolve_base_path(raw.get("base_path"), path.parent),
        strict_meta=_coerce_flag(raw.get("strict_meta", False), "strict_meta"),
    )


def _resolve_base_path(value: object, relative_to: Path) -> Path | None:
    """Return ``value`` as an absolute path anchored at ``relative_to``."""
    match value:
        case None:
            return None
        case str() as text if text.strip():
            candidate = Path(text.strip()).expanduser()
            if not candidate.is_absolute():
                candidate = relative_to / candidate
            return candidate.absolute()
        case _:
            msg = f"'base_path' must be a non-empty string, got {value!r}."
            raise DocsConfigError(msg)


def _coerce_flag(value: object, key: str) -> bool:
    """Return ``value`` when it is a boolean, raising DocsConfigError otherwise."""
    if isinstance(value, bool):
        return value
    msg = f"'{key}' must be true or false, got {value!r}."
    raise DocsConfigError(msg)


__all__ = ["DocsConfig", "DocsConfigError", "load_docs_config"]
