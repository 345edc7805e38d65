"""Data models for the analysis pipeline.

Every record is frozen, and its sequence and mapping fields are copied into
tuples and read-only mappings on construction, so a record never changes
after it is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple

# Marker set whenever a doctype node is seen; doctype strings are not told apart.
HTML5 = "HTML5"


def _freeze(record: object, sequences: Iterable[str] = (), mappings: Iterable[str] = ()) -> None:
    for name in sequences:
        object.__setattr__(record, name, tuple(getattr(record, name)))
    for name in mappings:
        object.__setattr__(record, name, MappingProxyType(dict(getattr(record, name))))


@dataclass(frozen=True)
class RawPage:
    """The raw HTTP response for a single page fetch."""

    url: str
    content: bytes
    status_code: int


@dataclass(frozen=True)
class StructuralFeatures:
    """Structural signals collected in one pass over a parsed document."""

    html_version: str = ""
    title: str = ""
    headings: Mapping[str, int] = field(default_factory=dict)
    has_login_form: bool = False
    links: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, sequences=("links",), mappings=("headings",))


@dataclass(frozen=True)
class ClassifiedLinks:
    """A page's links split into same-origin and cross-origin partitions.

    ``internal_targets`` holds the absolute URL to probe for each entry of
    ``internal`` (same order); root-relative links keep their original form
    in ``internal`` and get ``origin + path`` here.
    """

    internal: Tuple[str, ...] = ()
    external: Tuple[str, ...] = ()
    internal_targets: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, sequences=("internal", "external", "internal_targets"))


@dataclass(frozen=True)
class AnalysisResult:
    """Final outcome of analysing one page."""

    url: str
    html_version: str
    title: str
    headings: Mapping[str, int]
    has_login_form: bool
    internal_links: Tuple[str, ...]
    external_links: Tuple[str, ...]
    inaccessible_internal_links_count: int
    inaccessible_external_links_count: int

    def __post_init__(self) -> None:
        _freeze(self, sequences=("internal_links", "external_links"), mappings=("headings",))

    @property
    def internal_links_count(self) -> int:
        return len(self.internal_links)

    @property
    def external_links_count(self) -> int:
        return len(self.external_links)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view including the derived counts."""
        return {
            "url": self.url,
            "html_version": self.html_version,
            "title": self.title,
            "headings": dict(self.headings),
            "has_login_form": self.has_login_form,
            "internal_links": list(self.internal_links),
            "external_links": list(self.external_links),
            "internal_links_count": self.internal_links_count,
            "external_links_count": self.external_links_count,
            "inaccessible_internal_links_count": self.inaccessible_internal_links_count,
            "inaccessible_external_links_count": self.inaccessible_external_links_count,
        }
