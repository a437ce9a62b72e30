import html
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional
from urllib.parse import urljoin

from site_analyzer.config import SITEMAP_PATHS, SITEMAP_TIMEOUT_SEC
from site_analyzer.crawlers.urls import CrawlTarget, clean_link, same_site, should_skip_url
from site_analyzer.services.source_fetcher import decode_body, fetch_source

logger = logging.getLogger(__name__)

# Lenient on purpose: broken XML still yields its <loc> entries
LOC_PATTERN = re.compile(r"<loc>\s*(.*?)\s*</loc>", re.IGNORECASE | re.DOTALL)


def extract_locs(xml_text: str) -> List[str]:
    return [
        html.unescape(m.group(1)).strip()
        for m in LOC_PATTERN.finditer(xml_text or "")
    ]


def _fetch_locs(sitemap_url: str, timeout: float) -> List[str]:
    fetched = fetch_source(sitemap_url, timeout=timeout)
    return extract_locs(decode_body(fetched.content, fetched.content_type))


def load_sitemap_urls(
    target: CrawlTarget,
    *,
    paths: Optional[List[str]] = None,
    timeout: float = SITEMAP_TIMEOUT_SEC,
    debug: Optional[Dict] = None,
) -> List[str]:
    """
    Fetch the well-known sitemap locations concurrently and return the
    same-site page URLs they list (cleaned, deduplicated, in order).
    A sitemap that fails to load contributes nothing.
    """

    paths = SITEMAP_PATHS if paths is None else paths
    if not paths:
        return []

    sitemap_urls = [urljoin(target.url, p) for p in paths]

    with ThreadPoolExecutor(max_workers=len(sitemap_urls)) as pool:
        futures = [pool.submit(_fetch_locs, u, timeout) for u in sitemap_urls]

    found: List[str] = []
    seen = set()

    for sitemap_url, future in zip(sitemap_urls, futures):
        try:
            locs = future.result()
        except Exception as e:
            logger.debug("Sitemap fetch failed %s: %s", sitemap_url, e)
            if debug is not None:
                debug["logs"].append(f"sitemap {sitemap_url}: {e}")
            continue

        for loc in locs:
            try:
                if not same_site(loc, target.domain) or should_skip_url(loc):
                    continue
                link = clean_link(loc)
            except ValueError:
                continue
            if link not in seen:
                seen.add(link)
                found.append(link)

    logger.info("Sitemaps listed %d same-site URLs for %s", len(found), target.domain)
    return found
