import logging
import threading
import time
from collections import deque
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional

from site_analyzer.config import (
    BATCH_SIZE,
    BLOCKED_PAGE_MARKERS,
    INITIAL_TIMEOUT_SEC,
    MAX_PAGES,
    MIN_PAGE_TEXT_LEN,
    MIN_PDF_TEXT_LEN,
    PAGE_TEXT_LIMIT,
    PAGE_TIMEOUT_SEC,
    PDF_TEXT_LIMIT,
    SPA_MAX_TEXT_LEN,
    SPA_ROOT_MARKERS,
)
from site_analyzer.crawlers.link_discovery import discover_links
from site_analyzer.crawlers.sitemap_loader import load_sitemap_urls
from site_analyzer.crawlers.urls import CrawlTarget, clean_link, page_key
from site_analyzer.services.html_extractor import (
    clean_html,
    extract_title,
    find_marker,
    visible_text,
)
from site_analyzer.services.pdf_extractor import extract_pdf_text
from site_analyzer.services.render_proxy import fetch_rendered
from site_analyzer.services.source_fetcher import decode_body, detect_pdf, fetch_source

logger = logging.getLogger(__name__)


@dataclass
class CrawlResult:
    title: str
    home_content: str
    pages: Dict[str, str] = field(default_factory=dict)
    is_spa: bool = False
    blocked_marker: Optional[str] = None


def looks_like_spa_shell(html: str, text: str) -> bool:
    if len(text) >= SPA_MAX_TEXT_LEN:
        return False
    return any(marker in html for marker in SPA_ROOT_MARKERS)


class SiteCrawler:
    """
    One crawl of one site. Owns every piece of per-request state
    (visited set, work queue, scraped pages, debug info); build a new
    instance for each request.
    """

    def __init__(
        self,
        target: CrawlTarget,
        *,
        max_pages: int = MAX_PAGES,
        batch_size: int = BATCH_SIZE,
        debug: Optional[Dict] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.target = target
        self.max_pages = max_pages
        self.batch_size = batch_size
        self.clock = clock
        self.debug = debug if debug is not None else {"logs": []}
        self.debug.setdefault("logs", [])

        self.visited = set()
        self.queue = deque()
        self._queued = set()
        self.pages: Dict[str, str] = {}

        self.title = target.domain
        self.home_content = ""
        self.is_spa = False
        self.blocked_marker: Optional[str] = None

        # guards only visited check-and-add and the capped page insert
        self._lock = threading.Lock()

    # =========================
    # Queue / state helpers
    # =========================
    def enqueue(self, links: Iterable[str]) -> None:
        # best-effort dedup: two workers may still queue the same link
        for link in links:
            if link in self.visited or link in self._queued:
                continue
            self._queued.add(link)
            self.queue.append(link)

    def _claim(self, url: str) -> bool:
        with self._lock:
            if url in self.visited:
                return False
            self.visited.add(url)
            return True

    def _store_page(self, key: str, content: str) -> bool:
        with self._lock:
            if key not in self.pages and len(self.pages) >= self.max_pages:
                return False
            self.pages[key] = content
            return True

    def _log(self, message: str) -> None:
        self.debug["logs"].append(message)

    def _budget_left(self) -> bool:
        if len(self.pages) >= self.max_pages:
            self._log(f"page cap reached ({self.max_pages})")
            return False
        if self.target.expired(self.clock()):
            self._log("time budget exhausted")
            return False
        return True

    # =========================
    # Stage 1: sitemaps
    # =========================
    def seed_from_sitemaps(self) -> None:
        links = load_sitemap_urls(self.target, debug=self.debug)
        self.debug["sitemapUrls"] = len(links)
        self.enqueue(links)

    # =========================
    # Stage 2: initial page
    # =========================
    def fetch_initial_page(self) -> None:
        url = self.target.url
        # links are compared without query, so mark the bare home URL too
        self.visited.update((url, clean_link(url)))
        self.debug["targetUrl"] = url

        try:
            fetched = fetch_source(url, timeout=INITIAL_TIMEOUT_SEC)
        except Exception as e:
            logger.info("Initial fetch failed for %s: %s", url, e)
            self.debug["initialError"] = str(e)
            return

        self.debug["initialStatus"] = fetched.status_code
        self.debug["initialContentType"] = fetched.content_type

        if detect_pdf(url, fetched.content_type, fetched.content):
            self.debug["pdfBufferLength"] = len(fetched.content)
            try:
                text = extract_pdf_text(fetched.content)
            except Exception as e:
                self.debug["pdfError"] = str(e)
                return
            self.home_content = f"[PDF CONTENT EXTRACTED]\n{text[:PDF_TEXT_LIMIT]}"
            self.debug["pdfParsed"] = True
            self.debug["pdfTextLength"] = len(text)
            return

        html = decode_body(fetched.content, fetched.content_type)
        self.debug["htmlLength"] = len(html)
        self.enqueue(discover_links(html, url, self.target))

        text = visible_text(html)
        marker = find_marker(text, BLOCKED_PAGE_MARKERS)
        if marker:
            self.blocked_marker = marker
            self.debug["initialBlocked"] = marker
            return

        if looks_like_spa_shell(html, text):
            self.is_spa = True
            self.debug["isSPA"] = True
            logger.info("SPA shell detected on %s, crawling through render proxy", url)
            return

        self.title = extract_title(html) or self.title
        self.home_content = clean_html(html)

    # =========================
    # Stage 3: bounded BFS
    # =========================
    def crawl(self) -> None:
        with ThreadPoolExecutor(max_workers=self.batch_size) as pool:
            while self.queue and self._budget_left():
                batch = [
                    self.queue.popleft()
                    for _ in range(min(self.batch_size, len(self.queue)))
                ]
                wait([pool.submit(self._process_link, link) for link in batch])

    def _process_link(self, link: str) -> None:
        if not self._claim(link):
            return

        try:
            if self.is_spa:
                fetched = fetch_rendered(link, timeout=PAGE_TIMEOUT_SEC)
            else:
                fetched = fetch_source(link, timeout=PAGE_TIMEOUT_SEC)

            key = page_key(link)

            if detect_pdf(link, fetched.content_type, fetched.content):
                text = extract_pdf_text(fetched.content)
                if len(text) > MIN_PDF_TEXT_LEN:
                    self._store_page(
                        key,
                        f"[PDF CONTENT EXTRACTED FROM: {link}]\n{text[:PDF_TEXT_LIMIT]}",
                    )
                return

            body = decode_body(fetched.content, fetched.content_type)

            if self.is_spa:
                # proxy output is already readable text
                text = body.strip()
            else:
                self.enqueue(discover_links(body, link, self.target))
                text = clean_html(body)

            if len(text) > MIN_PAGE_TEXT_LEN and not find_marker(text, BLOCKED_PAGE_MARKERS):
                self._store_page(key, text[:PAGE_TEXT_LIMIT])

        except Exception as e:
            logger.debug("Skipping %s: %s", link, e)
            self._log(f"{link}: {e}")

    # =========================
    # Full run
    # =========================
    def run(self) -> CrawlResult:
        self.seed_from_sitemaps()
        self.fetch_initial_page()
        self.crawl()

        self.debug["pagesVisited"] = len(self.visited)
        self.debug["pagesKept"] = len(self.pages)
        self.debug["queueRemaining"] = len(self.queue)
        self.debug["elapsedSec"] = round(self.target.elapsed(self.clock()), 2)

        logger.info(
            "Crawl of %s done: %d visited, %d kept, spa=%s",
            self.target.domain, len(self.visited), len(self.pages), self.is_spa,
        )

        return CrawlResult(
            title=self.title,
            home_content=self.home_content,
            pages=dict(self.pages),
            is_spa=self.is_spa,
            blocked_marker=self.blocked_marker,
        )
