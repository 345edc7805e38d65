"""HTTP plumbing: shared client, request construction and the page fetch."""

from __future__ import annotations

import httpx

from pageanalyzer.config import settings
from pageanalyzer.context import RequestContext
from pageanalyzer.errors import RequestConstructionError, StatusError, TransportError
from pageanalyzer.logger import get_logger
from pageanalyzer.scraper.models import RawPage

log = get_logger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def build_client(timeout: float | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` shared by the page fetch and all probes.

    The client's connection pool is thread-safe, so one instance can serve
    every worker of the prober.
    """
    return httpx.Client(
        headers=_default_headers(),
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=True,
    )


def build_request(
    client: httpx.Client,
    method: str,
    url: str,
    ctx: RequestContext,
    timeout: float,
) -> httpx.Request:
    """Build a *method* request for *url* whose timeout respects *ctx*.

    Raises:
        RequestConstructionError: If *url* cannot be parsed or is not an
            absolute ``http``/``https`` URL, or if its host fails IDNA
            encoding (``idna.IDNAError`` and ``UnicodeError`` are both
            ``ValueError``s).
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise RequestConstructionError(str(exc)) from exc
    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise RequestConstructionError(f"unsupported protocol scheme {parsed.scheme!r}")
    if not parsed.host:
        raise RequestConstructionError(f"no host in request URL {url!r}")
    try:
        return client.build_request(method, parsed, timeout=ctx.limit(timeout))
    except (httpx.InvalidURL, ValueError) as exc:
        raise RequestConstructionError(str(exc)) from exc


def fetch_page(
    client: httpx.Client,
    ctx: RequestContext,
    url: str,
    timeout: float | None = None,
) -> RawPage:
    """GET *url* under *ctx* and return a :class:`RawPage`.

    Raises:
        RequestConstructionError: If no request can be built for *url*, or
            its host cannot be encoded when the request is sent.
        TransportError: On network failure, timeout or a done *ctx*.
        StatusError: If the response status is outside ``[200, 300)``.
    """
    request = build_request(
        client,
        "GET",
        url,
        ctx,
        settings.request_timeout if timeout is None else timeout,
    )
    ctx.raise_if_done()

    try:
        response = client.send(request)
    except httpx.HTTPError as exc:
        log.error("page fetch failed", url=url, error=str(exc))
        raise TransportError(str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        # Hosts the socket layer cannot IDNA-encode, e.g. empty labels.
        log.error("page fetch failed", url=url, error=str(exc))
        raise RequestConstructionError(str(exc)) from exc
    # A context that ended mid-flight fails the fetch even if bytes arrived.
    ctx.raise_if_done()

    if not 200 <= response.status_code < 300:
        log.warning("page fetch rejected", url=url, status_code=response.status_code)
        raise StatusError(response.status_code)

    return RawPage(url=url, content=response.content, status_code=response.status_code)
