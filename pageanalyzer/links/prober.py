"""Reachability probing of many links under bounded concurrency.

Each link gets one ``HEAD`` request.  At most :data:`MAX_CONCURRENT_PROBES`
requests are in flight at any time: a fixed pool of worker threads drains
the shared queue of submitted links, and the caller tallies one boolean per
link as results arrive, giving up on the rest once the context ends.
Probe failures of any kind (bad URL, network error, timeout, cancelled
context) count as inaccessible and never propagate.
"""

from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import Sequence

import httpx

from pageanalyzer.config import settings
from pageanalyzer.context import RequestContext
from pageanalyzer.errors import RequestConstructionError
from pageanalyzer.logger import get_logger
from pageanalyzer.scraper.fetcher import build_request

log = get_logger(__name__)

MAX_CONCURRENT_PROBES = 10

# Seconds between context checks while waiting on in-flight probes.
_POLL_INTERVAL = 0.05


def is_accessible_status(status_code: int) -> bool:
    """Success and redirect codes (``200 <= code < 400``) count as reachable."""
    return 200 <= status_code < 400


def probe_link(
    client: httpx.Client,
    ctx: RequestContext,
    link: str,
    timeout: float | None = None,
) -> bool:
    """Return ``True`` if *link* answers a ``HEAD`` request with a 2xx/3xx.

    Never raises for probe-level failures; they all mean ``False``.
    """
    if ctx.done():
        return False

    try:
        request = build_request(
            client,
            "HEAD",
            link,
            ctx,
            settings.request_timeout if timeout is None else timeout,
        )
    except RequestConstructionError as exc:
        log.debug("probe not built", link=link, error=str(exc))
        return False

    try:
        response = client.send(request, stream=True)
    except (httpx.HTTPError, ValueError) as exc:
        log.debug("probe failed", link=link, error=str(exc))
        return False

    try:
        if ctx.done():
            return False
        return is_accessible_status(response.status_code)
    finally:
        response.close()


def count_inaccessible_links(
    client: httpx.Client,
    ctx: RequestContext,
    links: Sequence[str],
    timeout: float | None = None,
) -> int:
    """Probe every link in *links* and return how many are inaccessible.

    Returns ``0`` straight away for an empty input, without starting any
    worker.  Completion order is irrelevant to the result.  Once *ctx* is
    done the tally stops waiting: probes still queued are cancelled, probes
    still in flight are abandoned to finish on their own, and every link
    without a result counts as inaccessible.
    """
    if not links:
        return 0

    accessible = 0
    pool = ThreadPoolExecutor(
        max_workers=min(MAX_CONCURRENT_PROBES, len(links)),
        thread_name_prefix="link-probe",
    )
    try:
        pending = {pool.submit(probe_link, client, ctx, link, timeout) for link in links}
        while pending:
            done, pending = wait(pending, timeout=_POLL_INTERVAL, return_when=FIRST_COMPLETED)
            accessible += sum(1 for future in done if future.result())
            if pending and ctx.done():
                log.debug("link probing abandoned", unresolved=len(pending))
                break
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    inaccessible = len(links) - accessible
    log.debug("links probed", total=len(links), inaccessible=inaccessible)
    return inaccessible
