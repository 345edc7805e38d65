"""High-level analysis of a single web page.

:class:`AnalysisService` is the one entry point the HTTP layer and the CLI
call.  It fetches the page, extracts its structure, partitions its links by
origin and probes both partitions for reachability, returning one
:class:`~pageanalyzer.scraper.models.AnalysisResult`.
"""

from __future__ import annotations

import httpx

from pageanalyzer.config import settings
from pageanalyzer.context import RequestContext
from pageanalyzer.links.classifier import classify_links
from pageanalyzer.links.prober import count_inaccessible_links
from pageanalyzer.logger import get_logger
from pageanalyzer.scraper.extractor import analyze_markup
from pageanalyzer.scraper.fetcher import build_client, fetch_page
from pageanalyzer.scraper.models import AnalysisResult

log = get_logger(__name__)


class AnalysisService:
    """Runs page analyses over one shared ``httpx.Client``.

    Args:
        client: Client used for the page fetch and every probe.  When omitted
            the service builds its own and closes it in :meth:`close`.
        timeout: Per-request timeout in seconds; defaults to
            ``settings.request_timeout``.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._owns_client = client is None
        self.client = client if client is not None else build_client(self.timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> AnalysisService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def analyze(self, ctx: RequestContext, page_url: str) -> AnalysisResult:
        """Analyse *page_url* under *ctx*.

        Raises:
            RequestConstructionError: *page_url* is not a usable URL.
            TransportError: The page could not be fetched (including a done
                *ctx*).
            StatusError: The page answered outside ``[200, 300)``.

        Link probe failures never raise; they only raise the inaccessible
        counts.
        """
        raw = fetch_page(self.client, ctx, page_url, self.timeout)
        features = analyze_markup(raw.content)
        links = classify_links(features.links, page_url)

        inaccessible_internal = count_inaccessible_links(
            self.client, ctx, links.internal_targets, self.timeout
        )
        inaccessible_external = count_inaccessible_links(
            self.client, ctx, links.external, self.timeout
        )

        log.info(
            "page analysed",
            url=page_url,
            internal=len(links.internal),
            external=len(links.external),
            inaccessible_internal=inaccessible_internal,
            inaccessible_external=inaccessible_external,
        )

        return AnalysisResult(
            url=page_url,
            html_version=features.html_version,
            title=features.title,
            headings=features.headings,
            has_login_form=features.has_login_form,
            internal_links=links.internal,
            external_links=links.external,
            inaccessible_internal_links_count=inaccessible_internal,
            inaccessible_external_links_count=inaccessible_external,
        )


def analyze_page(page_url: str, timeout: float | None = None) -> AnalysisResult:
    """One-shot analysis with a fresh service and a deadline-bound context."""
    ctx = RequestContext(timeout=settings.analysis_timeout if timeout is None else timeout)
    with AnalysisService() as service:
        return service.analyze(ctx, page_url)
