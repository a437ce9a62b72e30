from bs4 import BeautifulSoup
from typing import Iterable, Optional
import re

NOISE_TAGS = ["script", "style", "nav", "footer"]


def clean_html(html: str) -> str:
    """
    Plain text of a page without script/style/nav/footer blocks.
    Whitespace runs collapse to single spaces.
    """

    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(NOISE_TAGS):
        tag.decompose()

    return clean_text(soup.get_text(" "))


def visible_text(html: str) -> str:
    """All text with tags stripped; nothing removed."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    return soup.get_text(" ").strip()


def extract_title(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    if soup.title is None:
        return ""
    return clean_text(soup.title.get_text(" "))


def find_marker(text: str, markers: Iterable[str]) -> Optional[str]:
    for marker in markers:
        if marker in text:
            return marker
    return None


def clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "")).strip()
