import logging
import time
from typing import Any, Callable, Dict

from site_analyzer.config import (
    FALLBACK_MIN_CHARS,
    FALLBACK_TIMEOUT_SEC,
    HARD_LIMIT_SEC,
    RESPONSE_MARGIN_SEC,
)
from site_analyzer.crawlers.smart_crawler import SiteCrawler
from site_analyzer.crawlers.urls import CrawlTarget
from site_analyzer.services.corpus import assess_quality, build_corpus
from site_analyzer.services import fallback_generator

logger = logging.getLogger(__name__)


def fallback_timeout(target: CrawlTarget, now: float) -> float:
    """Seconds the fallback may use without crossing the host's hard limit."""
    remaining = HARD_LIMIT_SEC - RESPONSE_MARGIN_SEC - target.elapsed(now)
    return min(FALLBACK_TIMEOUT_SEC, remaining)


def analyze_site(
    target: CrawlTarget,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Dict[str, Any]:
    """
    Crawl -> aggregate -> quality gate -> (simulated crawl fallback).

    Network and generation failures never escape from here; they end up
    in the returned debug info. Only unexpected bugs raise.
    """

    debug: Dict[str, Any] = {"logs": []}

    # -------------------------
    # CRAWL
    # -------------------------
    logger.info("Analyzing %s", target.url)
    result = SiteCrawler(target, debug=debug, clock=clock).run()

    # -------------------------
    # AGGREGATE
    # -------------------------
    title = result.title
    data = build_corpus(title, target.url, result.home_content, result.pages)

    # -------------------------
    # QUALITY GATE
    # -------------------------
    quality = assess_quality(data, home_blocked=result.blocked_marker is not None)
    debug["finalDataLength"] = len(data)
    debug["isThin"] = quality.is_thin
    debug["isBlocked"] = quality.is_blocked
    debug["isLowQuality"] = quality.is_low_quality

    simulated = False

    if quality.needs_fallback:
        debug["fallbackEngaged"] = True
        logger.info(
            "Weak crawl for %s (thin=%s blocked=%s low_quality=%s), trying simulated crawl",
            target.domain, quality.is_thin, quality.is_blocked, quality.is_low_quality,
        )

        text = None
        timeout = fallback_timeout(target, clock())

        if timeout <= 0:
            logger.warning("No time left for a simulated crawl of %s", target.domain)
            debug["fallbackSkipped"] = "time budget exhausted"
        else:
            debug["fallbackTimeoutSec"] = round(timeout, 2)
            try:
                text = fallback_generator.generate_simulated_crawl(target, timeout=timeout)
            except Exception as e:
                logger.warning("Simulated crawl failed for %s: %s", target.domain, e)
                debug["fallbackError"] = str(e)
            else:
                if text is None:
                    debug["fallbackSkipped"] = "missing OPENAI_API_KEY"

        if text and len(text) > FALLBACK_MIN_CHARS:
            data = f"{text}\n\n{fallback_generator.DISCLOSURE_NOTE}"
            title = f"{target.domain} (Simulated Demo)"
            simulated = True
            debug["fallbackSuccess"] = True
        elif text:
            debug["fallbackTooShort"] = len(text)

    return {
        "success": True,
        "data": data,
        "title": title,
        "pagesScraped": len(result.pages) + (0 if simulated else 1),
        "debug": debug,
    }
