"""Link package: origin classification and reachability probing."""

from pageanalyzer.links.classifier import classify_links, page_origin
from pageanalyzer.links.prober import (
    MAX_CONCURRENT_PROBES,
    count_inaccessible_links,
    is_accessible_status,
    probe_link,
)

__all__ = [
    "classify_links",
    "page_origin",
    "count_inaccessible_links",
    "probe_link",
    "is_accessible_status",
    "MAX_CONCURRENT_PROBES",
]
