from site_analyzer.config import RENDER_PROXY_BASE
from site_analyzer.services.source_fetcher import FetchedSource, fetch_source


def proxy_url(url: str, base: str = RENDER_PROXY_BASE) -> str:
    return f"{base.rstrip('/')}/{url}"


def fetch_rendered(url: str, *, timeout: float) -> FetchedSource:
    """
    Fetch a JS-rendered page through the rendering proxy.
    The proxy executes the page's scripts and answers with readable text,
    so the body needs no further HTML cleaning.
    """

    return fetch_source(proxy_url(url), timeout=timeout)
