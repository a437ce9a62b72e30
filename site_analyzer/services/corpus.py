from dataclasses import dataclass
from typing import Dict

from site_analyzer.config import (
    BLOCKED_CORPUS_MARKERS,
    CORPUS_LIMIT,
    QUALITY_KEYWORDS,
    THIN_CONTENT_CHARS,
)


@dataclass(frozen=True)
class QualityReport:
    is_thin: bool
    is_blocked: bool
    is_low_quality: bool

    @property
    def needs_fallback(self) -> bool:
        return self.is_thin or self.is_blocked or self.is_low_quality


def build_corpus(
    title: str,
    url: str,
    home_content: str,
    pages: Dict[str, str],
    *,
    limit: int = CORPUS_LIMIT,
) -> str:
    """
    WEBSITE header, home page section, then one section per scraped page.
    The result never exceeds `limit` characters.
    """

    parts = [
        f"WEBSITE: {title} ({url})\n\n",
        f"--- HOME PAGE ---\n{home_content}\n\n",
    ]
    for path, content in pages.items():
        parts.append(f"--- PAGE: {path} ---\n{content}\n\n")

    return "".join(parts)[:limit]


def assess_quality(corpus: str, *, home_blocked: bool = False) -> QualityReport:
    """
    `home_blocked`: the home page hit a block page, whose text never
    makes it into the corpus.
    """
    lowered = corpus.lower()
    return QualityReport(
        is_thin=len(corpus) < THIN_CONTENT_CHARS,
        is_blocked=home_blocked or any(m in corpus for m in BLOCKED_CORPUS_MARKERS),
        is_low_quality=not any(k in lowered for k in QUALITY_KEYWORDS),
    )
