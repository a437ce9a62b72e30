"""Shared fixtures.

``fake_web`` replaces every ``fetch_source`` call site with an in-memory
router so no test touches the network. Unknown URLs fail the same way a
404 does in production (``RuntimeError``).
"""

from __future__ import annotations

import threading
from typing import Dict, List, Union
from unittest.mock import patch

import pytest

from site_analyzer.services.source_fetcher import FetchedSource

_FETCH_SITES = [
    "site_analyzer.crawlers.smart_crawler.fetch_source",
    "site_analyzer.crawlers.sitemap_loader.fetch_source",
    "site_analyzer.services.render_proxy.fetch_source",
]


def html_page(body: str, title: str = "") -> FetchedSource:
    head = f"<head><title>{title}</title></head>" if title else "<head></head>"
    html = f"<html>{head}<body>{body}</body></html>"
    return FetchedSource(html.encode("utf-8"), "text/html; charset=utf-8", 200)


def text_page(text: str) -> FetchedSource:
    return FetchedSource(text.encode("utf-8"), "text/plain", 200)


def pdf_file(content: bytes = b"%PDF-1.4 fake") -> FetchedSource:
    return FetchedSource(content, "application/pdf", 200)


class FakeWeb:
    def __init__(self):
        self.routes: Dict[str, Union[FetchedSource, Exception]] = {}
        self.calls: List[str] = []
        self.timeouts: Dict[str, float] = {}
        self._lock = threading.Lock()

    def add(self, url: str, response: Union[FetchedSource, Exception]) -> None:
        self.routes[url] = response

    def fetch(self, source: str, *, timeout: float) -> FetchedSource:
        with self._lock:
            self.calls.append(source)
            self.timeouts[source] = timeout
        response = self.routes.get(source)
        if response is None:
            raise RuntimeError(f"Failed to fetch source: 404 for {source}")
        if isinstance(response, Exception):
            raise response
        return response

    def count(self, url: str) -> int:
        return self.calls.count(url)


@pytest.fixture
def fake_web():
    web = FakeWeb()
    patches = [patch(target, side_effect=web.fetch) for target in _FETCH_SITES]
    for p in patches:
        p.start()
    yield web
    for p in patches:
        p.stop()
