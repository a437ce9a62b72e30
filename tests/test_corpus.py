"""Tests for site_analyzer.services.corpus (aggregation + quality gate)."""

from __future__ import annotations

from site_analyzer.services.corpus import QualityReport, assess_quality, build_corpus


# ===========================================================================
# build_corpus
# ===========================================================================

def test_sections_in_order():
    corpus = build_corpus(
        "Acme",
        "https://acme.com/",
        "Welcome home",
        {"/about": "About text", "/contact": "Contact text"},
    )
    assert corpus == (
        "WEBSITE: Acme (https://acme.com/)\n\n"
        "--- HOME PAGE ---\nWelcome home\n\n"
        "--- PAGE: /about ---\nAbout text\n\n"
        "--- PAGE: /contact ---\nContact text\n\n"
    )


def test_empty_home_section_kept():
    corpus = build_corpus("acme.com", "https://acme.com/", "", {})
    assert corpus == "WEBSITE: acme.com (https://acme.com/)\n\n--- HOME PAGE ---\n\n\n"


def test_ceiling_applies_to_whole_corpus():
    pages = {f"/p{i}": "x" * 8000 for i in range(50)}
    corpus = build_corpus("Big", "https://big.com/", "y" * 10_000, pages)
    assert len(corpus) == 100_000


def test_custom_limit():
    assert len(build_corpus("t", "u", "z" * 500, {}, limit=100)) == 100


# ===========================================================================
# assess_quality
# ===========================================================================

_GOOD = ("Our services include repairs. About us: family owned. Contact us today. " * 40)


def test_good_corpus_passes():
    report = assess_quality(_GOOD)
    assert report == QualityReport(is_thin=False, is_blocked=False, is_low_quality=False)
    assert not report.needs_fallback


def test_short_corpus_is_thin():
    report = assess_quality("About our services and contact details.")
    assert report.is_thin
    assert report.needs_fallback


def test_cloudflare_marker_blocks():
    report = assess_quality(_GOOD + " Checking your browser - Cloudflare")
    assert report.is_blocked
    assert not report.is_thin


def test_enable_javascript_marker_blocks():
    assert assess_quality(_GOOD + " Please Enable JavaScript to continue").is_blocked


def test_missing_keywords_is_low_quality():
    report = assess_quality("Lorem ipsum dolor sit amet. " * 200)
    assert report.is_low_quality
    assert not report.is_thin


def test_keywords_case_insensitive():
    assert not assess_quality(("CONTACT " + "filler " * 10) * 50).is_low_quality


def test_blocked_home_page_flags_blocked_without_marker_in_corpus():
    report = assess_quality(_GOOD, home_blocked=True)
    assert report.is_blocked
    assert report.needs_fallback
