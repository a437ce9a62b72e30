import re
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urldefrag, urlparse, urlunparse

from site_analyzer.config import CRAWL_DEADLINE_SEC, SKIP_EXTENSIONS

# "page.html", "report.pdf" ... anything else is treated as a directory
FILE_SUFFIX = re.compile(r"\.[a-zA-Z0-9]{2,5}$")


@dataclass(frozen=True)
class CrawlTarget:
    url: str
    domain: str
    started_at: float
    deadline: float

    def elapsed(self, now: float) -> float:
        return now - self.started_at

    def expired(self, now: float) -> bool:
        return now > self.deadline


def normalize_target(
    raw: str,
    *,
    budget_sec: float = CRAWL_DEADLINE_SEC,
    clock: Callable[[], float] = time.monotonic,
) -> CrawlTarget:
    """
    Turn user input into a fetchable absolute URL.

    - adds https:// when no scheme is given
    - appends "/" to directory-like paths
    - domain = hostname without a leading "www."

    Raises ValueError when the input cannot be parsed into a URL with a host.
    """

    url = (raw or "").strip()
    if not url:
        raise ValueError("URL is empty")

    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    url, _ = urldefrag(url)
    parsed = urlparse(url)

    host = parsed.hostname
    if not host:
        raise ValueError(f"URL has no host: {raw!r}")

    path = parsed.path
    if not path.endswith("/") and not FILE_SUFFIX.search(path):
        path += "/"

    url = urlunparse(parsed._replace(path=path))

    started_at = clock()
    return CrawlTarget(
        url=url,
        domain=host[4:] if host.startswith("www.") else host,
        started_at=started_at,
        deadline=started_at + budget_sec,
    )


def clean_link(url: str) -> str:
    """origin + path; query and fragment dropped."""
    p = urlparse(url)
    return f"{p.scheme}://{p.netloc}{p.path or '/'}"


def same_site(url: str, domain: str) -> bool:
    host: Optional[str] = urlparse(url).hostname
    return bool(host) and domain in host


def should_skip_url(url: str) -> bool:
    path = urlparse(url).path.lower()
    return path.endswith(SKIP_EXTENSIONS)


def page_key(url: str) -> str:
    return urlparse(url).path or "/"
