"""Cyclopts CLI entrypoint for inspecting a documentation tree.

The ``docs`` console script defined here lists the pages declared in
``meta.json``, prints individual pages with their frontmatter, and checks that
the navigation descriptor and the files on disk agree. Typical usage is running
``docs check`` in CI after editing documentation so broken navigation entries
fail the build.

Examples
--------
Check the conventional docs tree:

>>> from docs_provider.cli import main
>>> main()  # doctest: +SKIP

Show a single page from another tree:

>>> from docs_provider.cli import app
>>> app(["show", "http", "controllers", "--base-path", "site/docs"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import META_FILENAME, PATH_SEPARATOR
from .config import DocsConfig, load_docs_config
from .models import DocsMetaError, DocsPathError, NavigationDescriptor
from .provider import DocsProvider, MetaErrorHandler

app = App(name="docs", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

BasePathOption = typ.Annotated[
    Path | None,
    Parameter(help="Documentation root directory", env_var="INPUT_BASE_PATH"),
]
ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to a docs.yaml settings file", env_var="INPUT_CONFIG"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Enable debug logging")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _build_provider(
    *,
    config: Path | None,
    base_path: Path | None,
    verbose: bool,
    on_meta_error: MetaErrorHandler | None = None,
) -> DocsProvider:
    """Configure logging and return a provider for the selected docs tree.

    ``base_path`` takes precedence over the value read from ``config``.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_docs_config(config) if config else DocsConfig()
    if base_path is not None:
        settings.base_path = base_path
    return DocsProvider.from_config(settings, on_meta_error=on_meta_error)


@app.command(help="List every documentation path declared in meta.json.")
def paths(
    *,
    base_path: BasePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print ``<section-id>/<file>`` for every page, in navigation order."""
    docs = _build_provider(config=config, base_path=base_path, verbose=verbose)
    for path in docs.get_all_paths():
        print(path)


@app.command(help="List documentation sections with their page counts.")
def sections(
    *,
    base_path: BasePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print one tab-separated line per section: id, title, page count."""
    docs = _build_provider(config=config, base_path=base_path, verbose=verbose)
    for section in docs.navigation().sections:
        print(f"{section.id}\t{section.title}\t{len(section.pages)} pages")


@app.command(help="Print a documentation page by section id and slug.")
def show(
    section: str,
    slug: str,
    *,
    raw: typ.Annotated[
        bool, Parameter(help="Print the file unchanged, frontmatter included")
    ] = False,
    base_path: BasePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print a page's frontmatter entries followed by its body.

    Parameters
    ----------
    section : str
        Section identifier from ``meta.json``.
    slug : str
        Page slug within ``section``.
    raw : bool, optional
        Print the file exactly as stored instead of the parsed form.

    Raises
    ------
    SystemExit
        With status 1 when the page is not declared or its file is missing.
    """
    docs = _build_provider(config=config, base_path=base_path, verbose=verbose)
    page = docs.find_page(section, slug)
    if page is None:
        print(f"No page '{slug}' in section '{section}'.")
        raise SystemExit(1)

    relative = f"{section}{PATH_SEPARATOR}{page['file']}"
    if raw:
        text = docs.read(relative)
        if text is None:
            print(f"File '{relative}' is listed in {META_FILENAME} but missing.")
            raise SystemExit(1)
        print(text, end="")
        return

    document = docs.parse(relative)
    if document is None:
        print(f"File '{relative}' is listed in {META_FILENAME} but missing.")
        raise SystemExit(1)
    for key, value in document.frontmatter.items():
        print(f"{key}: {value}")
    if document.frontmatter:
        print()
    print(document.content, end="")


@app.command(help="Verify meta.json and the files it references.")
def check(
    *,
    base_path: BasePathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Report navigation problems and exit non-zero when any are found.

    Problems include a missing or unusable ``meta.json``, duplicate section ids,
    duplicate slugs within a section, entries that are missing required keys
    or have the wrong shape, paths escaping the docs tree, and declared files
    that do not exist.

    Raises
    ------
    SystemExit
        With status 1 when at least one problem was reported.
    """
    problems: list[str] = []

    def _record_meta_error(error: DocsMetaError) -> None:
        problems.append(str(error))

    docs = _build_provider(
        config=config,
        base_path=base_path,
        verbose=verbose,
        on_meta_error=_record_meta_error,
    )
    if not docs.exists(META_FILENAME):
        problems.append(f"no {META_FILENAME} under '{_format_path(docs.base_path)}'")
    page_paths: list[str] = []
    try:
        navigation = docs.navigation()
        page_paths = docs.get_all_paths()
    except DocsMetaError:
        navigation = NavigationDescriptor()
    except KeyError as exc:
        problems.append(f"{META_FILENAME} entry is missing required key {exc}")
        navigation = NavigationDescriptor()
    except (TypeError, AttributeError) as exc:
        problems.append(f"{META_FILENAME} has a malformed entry: {exc}")
        navigation = NavigationDescriptor()

    for section_id in navigation.duplicate_section_ids():
        problems.append(f"duplicate section id '{section_id}'")
    for section in navigation.sections:
        for slug in section.duplicate_slugs():
            problems.append(f"duplicate slug '{slug}' in section '{section.id}'")
    for path in page_paths:
        try:
            present = docs.exists(path)
        except DocsPathError as exc:
            problems.append(str(exc))
            continue
        if not present:
            problems.append(f"missing file '{path}'")

    if problems:
        for problem in problems:
            print(f"error: {problem}")
        raise SystemExit(1)
    print(
        f"ok: {len(page_paths)} pages in {len(navigation.sections)} sections "
        f"under {_format_path(docs.base_path)}"
    )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docs`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
