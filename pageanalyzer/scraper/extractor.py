"""Structural extraction: turns page markup into :class:`StructuralFeatures`.

The document is parsed with BeautifulSoup's ``html.parser`` builder, which
never fails on malformed input, and then walked exactly once in document
order.  Everything that depends on order (link order, which ``<title>`` is
last) follows from that single pre-order walk.
"""

from __future__ import annotations

import warnings
from collections import Counter
from typing import Any, Dict, List, Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import Doctype, NavigableString, PreformattedString, Tag

from pageanalyzer.scraper.models import HTML5, StructuralFeatures

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _title_text(tag: Tag) -> str | None:
    """Return the text of *tag*'s first child, or ``None`` if it has none."""
    if not tag.contents:
        return None
    first = tag.contents[0]
    if isinstance(first, NavigableString) and not isinstance(first, PreformattedString):
        return str(first)
    return None


def _keep_all_values(attrs: Dict[str, Any], key: str, value: str) -> None:
    """Collect repeated attributes into a list instead of keeping the last."""
    existing = attrs[key]
    if isinstance(existing, list):
        existing.append(value)
    else:
        attrs[key] = [existing, value]


def _attribute_values(tag: Tag, key: str) -> List[str]:
    value = tag.get(key)
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item]
    return [value] if value else []


def contains_password_input(tag: Tag) -> bool:
    """Return ``True`` if any ``<input>`` under *tag* has ``type="password"``.

    The whole subtree is searched, at any depth, and the ``type`` value is
    compared case-insensitively.  *tag* itself counts too, and an input with
    a repeated ``type`` attribute matches if any of its values is ``password``.
    """
    candidates = tag.find_all("input")
    if tag.name == "input":
        candidates.insert(0, tag)
    for field in candidates:
        if any(value.lower() == "password" for value in _attribute_values(field, "type")):
            return True
    return False


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_markup(markup: Union[bytes, str]) -> BeautifulSoup:
    """Parse *markup* into a navigable tree.

    Never raises on malformed input; garbage yields a degenerate tree.
    Repeated attributes on one element keep every value, in source order.
    """
    with warnings.catch_warnings():
        # Short plain-text bodies look like file names or URLs to bs4.
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        return BeautifulSoup(markup, "html.parser", on_duplicate_attribute=_keep_all_values)


def extract_features(document: BeautifulSoup) -> StructuralFeatures:
    """Collect structural signals from a parsed *document* in one pass.

    * any doctype node sets ``html_version`` to ``"HTML5"``;
    * every ``<title>`` overwrites the title, so the last one wins;
    * ``h1``..``h6`` elements are counted per tag;
    * non-empty ``href`` values of ``<a>`` elements are kept in document order,
      every value of a repeated ``href`` included;
    * forms are scanned for a password input until one is found.
    """
    html_version = ""
    title = ""
    headings: Counter[str] = Counter()
    has_login_form = False
    links: List[str] = []

    for node in document.descendants:
        if isinstance(node, Doctype):
            html_version = HTML5
            continue
        if not isinstance(node, Tag):
            continue

        name = node.name
        if name == "title":
            text = _title_text(node)
            if text is not None:
                title = text
        elif name in _HEADING_TAGS:
            headings[name] += 1
        elif name == "a":
            links.extend(_attribute_values(node, "href"))
        elif name == "form":
            if not has_login_form:
                has_login_form = contains_password_input(node)

    return StructuralFeatures(
        html_version=html_version,
        title=title,
        headings=dict(headings),
        has_login_form=has_login_form,
        links=links,
    )


def analyze_markup(markup: Union[bytes, str]) -> StructuralFeatures:
    """Parse *markup* and extract its :class:`StructuralFeatures`."""
    return extract_features(parse_markup(markup))
