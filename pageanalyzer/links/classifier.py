"""Same-origin / cross-origin partitioning of a page's links."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlsplit

from pageanalyzer.scraper.models import ClassifiedLinks


def page_origin(page_url: str) -> str:
    """Return ``scheme://host[:port]`` for *page_url* (userinfo dropped)."""
    parts = urlsplit(page_url)
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


def classify_links(links: Iterable[str], page_url: str) -> ClassifiedLinks:
    """Split *links* into internal and external partitions for *page_url*.

    A link is internal when it is root-relative (starts with ``/``) or when
    it contains the page origin anywhere in its text.  The containment test
    is deliberately loose: an external URL that merely embeds the origin,
    say in a query string, is counted as internal.  Everything else,
    including ``mailto:`` links and bare ``#fragment`` anchors, is external.

    No link is dropped and document order is kept within each partition.
    """
    origin = page_origin(page_url)
    internal: list[str] = []
    external: list[str] = []
    targets: list[str] = []

    for link in links:
        if link.startswith("/"):
            internal.append(link)
            targets.append(origin + link)
        elif origin in link:
            internal.append(link)
            targets.append(link)
        else:
            external.append(link)

    return ClassifiedLinks(internal=internal, external=external, internal_targets=targets)
