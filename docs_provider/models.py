"""Typed dataclasses describing the documentation navigation tree."""

from __future__ import annotations

import collections
import collections.abc as cabc
import dataclasses as dc
import typing as typ

from ._constants import PATH_SEPARATOR


class DocsPathError(ValueError):
    """Raised when a relative documentation path escapes the base directory."""


class DocsMetaError(ValueError):
    """Raised when ``meta.json`` exists but cannot be used as a descriptor."""


def _duplicates(values: cabc.Iterable[str]) -> list[str]:
    """Return values seen more than once, in first-seen order."""
    counts = collections.Counter(values)
    return [value for value, count in counts.items() if count > 1]


@dc.dataclass(slots=True)
class Page:
    """A single documentation entry inside a section.

    Attributes
    ----------
    file : str
        Filename relative to the owning section directory.
    title : str
        Display title for navigation.
    slug : str
        URL identifier, unique within the owning section.
    """

    file: str
    title: str
    slug: str

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> Page:
        """Build a page from a decoded ``meta.json`` page object."""
        return cls(
            file=payload["file"],
            title=payload.get("title", ""),
            slug=payload["slug"],
        )


@dc.dataclass(slots=True)
class Section:
    """Named group of pages, listed in navigation order.

    Attributes
    ----------
    id : str
        Unique section identifier; also the section's directory name.
    title : str
        Display title for navigation.
    icon : str
        Opaque icon identifier for the UI.
    pages : list[Page]
        Pages owned by the section, in navigation order.
    """

    id: str
    title: str
    icon: str
    pages: list[Page] = dc.field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> Section:
        """Build a section and its pages from a decoded section object."""
        return cls(
            id=payload["id"],
            title=payload.get("title", ""),
            icon=payload.get("icon", ""),
            pages=[Page.from_mapping(page) for page in payload.get("pages") or []],
        )

    def find_page(self, slug: str) -> Page | None:
        """Return the first page whose slug equals ``slug``."""
        for page in self.pages:
            if page.slug == slug:
                return page
        return None

    def duplicate_slugs(self) -> list[str]:
        """Return slugs that more than one page in this section declares."""
        return _duplicates(page.slug for page in self.pages)


@dc.dataclass(slots=True)
class NavigationDescriptor:
    """Parsed form of ``meta.json``: the ordered list of sections."""

    sections: list[Section] = dc.field(default_factory=list)

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> NavigationDescriptor:
        """Build a descriptor from the decoded ``meta.json`` document.

        Parameters
        ----------
        payload : Mapping[str, Any]
            Decoded JSON object. Unknown keys are ignored and a missing or
            null ``sections`` entry yields an empty descriptor.

        Raises
        ------
        KeyError
            If a section lacks ``id`` or a page lacks ``file`` or ``slug``.
        """
        sections = payload.get("sections") or []
        return cls(sections=[Section.from_mapping(section) for section in sections])

    def find_section(self, section_id: str) -> Section | None:
        """Return the first section with ``section_id``, or ``None``."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def duplicate_section_ids(self) -> list[str]:
        """Return section ids declared more than once."""
        return _duplicates(section.id for section in self.sections)

    def paths(self) -> list[str]:
        """Return ``<section-id>/<file>`` for every page in navigation order."""
        return [
            f"{section.id}{PATH_SEPARATOR}{page.file}"
            for section in self.sections
            for page in section.pages
        ]


@dc.dataclass(slots=True)
class DocumentContent:
    """Frontmatter entries and body of one documentation file.

    Attributes
    ----------
    frontmatter : dict[str, str]
        Accepted ``key: "value"`` entries with escapes resolved.
    content : str
        File contents following the frontmatter block, or the whole file when
        there is no block.
    """

    frontmatter: dict[str, str]
    content: str

    @property
    def body(self) -> str:
        """Alias for :attr:`content`."""
        return self.content


__all__ = [
    "DocsMetaError",
    "DocsPathError",
    "DocumentContent",
    "NavigationDescriptor",
    "Page",
    "Section",
]
