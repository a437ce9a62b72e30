# site_analyzer/services/source_fetcher.py

import re

import requests
from typing import NamedTuple

from site_analyzer.config import MAX_DOWNLOAD_SIZE

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}


CHARSET_PATTERN = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)


class FetchedSource(NamedTuple):
    content: bytes
    content_type: str
    status_code: int


def fetch_source(source: str, *, timeout: float) -> FetchedSource:
    """
    Fetch raw content from a URL. One attempt, no retries.

    Returns:
    - content bytes
    - content_type (lowercased from HTTP headers)
    - status_code

    Raises RuntimeError on network errors and non-2xx responses.
    """

    if not isinstance(source, str) or not source.strip():
        raise ValueError("source must be a non-empty string URL")

    try:
        with requests.get(
            source,
            timeout=timeout,
            allow_redirects=True,
            headers=HEADERS,
            stream=True,
        ) as resp:

            resp.raise_for_status()

            content_type = resp.headers.get("Content-Type", "").lower()

            content = bytearray()
            for chunk in resp.iter_content(chunk_size=8192):
                if chunk:
                    content.extend(chunk)

                if len(content) > MAX_DOWNLOAD_SIZE:
                    raise ValueError("Downloaded file exceeds size limit (25MB)")

            return FetchedSource(bytes(content), content_type, resp.status_code)

    except requests.exceptions.RequestException as e:
        raise RuntimeError(f"Failed to fetch source: {e}")


def detect_pdf(url: str, content_type: str, content: bytes = b"") -> bool:
    if content_type and "application/pdf" in content_type:
        return True

    if content.startswith(b"%PDF"):
        return True

    clean_url = (url or "").lower().split("?")[0]
    return clean_url.endswith(".pdf")


def decode_body(content: bytes, content_type: str = "") -> str:
    """Decode with the charset from Content-Type, UTF-8 when absent or unknown."""
    match = CHARSET_PATTERN.search(content_type or "")
    if match:
        try:
            return content.decode(match.group(1), errors="ignore")
        except LookupError:
            pass
    return content.decode("utf-8", errors="ignore")
