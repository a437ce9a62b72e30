"""Tests for site_analyzer.crawlers.sitemap_loader."""

from __future__ import annotations

from conftest import text_page

from site_analyzer.crawlers.sitemap_loader import extract_locs, load_sitemap_urls
from site_analyzer.crawlers.urls import normalize_target

_SITEMAP = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc></url>
  <url><loc> https://example.com/about?ref=sm </loc></url>
  <url><loc>https://example.com/a&amp;b</loc></url>
  <url><loc>https://cdn.other.net/file</loc></url>
  <url><loc>https://example.com/logo.png</loc></url>
</urlset>
"""


def test_extract_locs_lenient_on_broken_xml():
    xml = "<urlset><url><loc>https://example.com/x</loc><url><LOC>https://example.com/y</LOC>"
    assert extract_locs(xml) == ["https://example.com/x", "https://example.com/y"]


def test_extract_locs_unescapes_entities():
    assert extract_locs("<loc>https://e.com/?a=1&amp;b=2</loc>") == ["https://e.com/?a=1&b=2"]


def test_extract_locs_empty():
    assert extract_locs("") == []
    assert extract_locs("not xml at all") == []


def test_sitemaps_yield_same_site_links(fake_web):
    target = normalize_target("example.com")
    fake_web.add("https://example.com/sitemap.xml", text_page(_SITEMAP))

    links = load_sitemap_urls(target)

    assert links == [
        "https://example.com/",
        "https://example.com/about",
        "https://example.com/a&b",
    ]


def test_every_sitemap_path_fetched_relative_to_target(fake_web):
    target = normalize_target("example.com/shop/")
    load_sitemap_urls(target, paths=["sitemap.xml", "sitemap_index.xml"], timeout=5)

    assert sorted(fake_web.calls) == [
        "https://example.com/shop/sitemap.xml",
        "https://example.com/shop/sitemap_index.xml",
    ]
    assert set(fake_web.timeouts.values()) == {5}


def test_failed_sitemaps_are_isolated_and_logged(fake_web):
    target = normalize_target("example.com")
    fake_web.add("https://example.com/sitemap_index.xml", TimeoutError("read timed out"))
    fake_web.add(
        "https://example.com/sitemap.xml",
        text_page("<urlset><url><loc>https://example.com/pricing</loc></url></urlset>"),
    )
    debug = {"logs": []}

    links = load_sitemap_urls(target, debug=debug)

    assert links == ["https://example.com/pricing"]
    assert any("read timed out" in line for line in debug["logs"])


def test_deduplicates_across_sitemaps(fake_web):
    target = normalize_target("example.com")
    body = text_page("<loc>https://example.com/faq</loc>")
    fake_web.add("https://example.com/sitemap.xml", body)
    fake_web.add("https://example.com/sitemap_index.xml", body)

    assert load_sitemap_urls(target) == ["https://example.com/faq"]


def test_no_paths_no_requests(fake_web):
    assert load_sitemap_urls(normalize_target("example.com"), paths=[]) == []
    assert fake_web.calls == []
