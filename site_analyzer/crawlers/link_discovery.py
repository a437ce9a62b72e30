from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from site_analyzer.crawlers.urls import CrawlTarget, clean_link, same_site, should_skip_url


def discover_links(html: str, current_url: str, target: CrawlTarget) -> List[str]:
    """
    Same-site content links found in <a href> tags of a page.

    Links are resolved against current_url and returned as origin + path,
    in page order, without duplicates and without the target URL itself.
    Malformed hrefs are skipped.
    """

    soup = BeautifulSoup(html or "", "html.parser")
    seen = set()
    links: List[str] = []
    home = clean_link(target.url)

    for a in soup.select("a[href]"):
        href = (a.get("href") or "").strip()
        if not href:
            continue

        try:
            abs_url = urljoin(current_url, href)
            if urlparse(abs_url).scheme not in ("http", "https"):
                continue
            if not same_site(abs_url, target.domain) or should_skip_url(abs_url):
                continue
            link = clean_link(abs_url)
        except ValueError:
            continue

        if link == home or link in seen:
            continue

        seen.add(link)
        links.append(link)

    return links
