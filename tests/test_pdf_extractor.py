"""Tests for site_analyzer.services.pdf_extractor.

``PdfReader`` is patched so no real PDF is needed; OCR is exercised with
``convert_from_bytes`` and ``pytesseract`` patched as well.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from site_analyzer.services import pdf_extractor
from site_analyzer.services.pdf_extractor import extract_pages, extract_pdf_text


def _reader(*page_texts):
    pages = []
    for text in page_texts:
        page = MagicMock()
        if isinstance(text, Exception):
            page.extract_text.side_effect = text
        else:
            page.extract_text.return_value = text
        pages.append(page)
    reader = MagicMock()
    reader.pages = pages
    return reader


def test_pages_joined_and_empty_pages_dropped(monkeypatch):
    monkeypatch.setattr(pdf_extractor, "OCR_ENABLE", False)
    with patch.object(pdf_extractor, "PdfReader", return_value=_reader(" Page one ", None, "Page three")):
        texts, page_count, ocr_pages = extract_pages(b"%PDF")
        full = extract_pdf_text(b"%PDF")

    assert texts == ["Page one", "Page three"]
    assert page_count == 3
    assert ocr_pages == []
    assert full == "Page one\n\nPage three"


def test_broken_page_does_not_abort_document(monkeypatch):
    monkeypatch.setattr(pdf_extractor, "OCR_ENABLE", False)
    with patch.object(pdf_extractor, "PdfReader", return_value=_reader(KeyError("/Font"), "Fine")):
        assert extract_pdf_text(b"%PDF") == "Fine"


def test_unreadable_pdf_raises():
    with patch.object(pdf_extractor, "PdfReader", side_effect=ValueError("EOF marker not found")):
        with pytest.raises(ValueError):
            extract_pdf_text(b"garbage")


def test_ocr_used_when_enabled_and_text_short(monkeypatch):
    monkeypatch.setattr(pdf_extractor, "OCR_ENABLE", True)
    monkeypatch.setattr(pdf_extractor, "OCR_MIN_TEXT_CHARS", 20)

    with patch.object(pdf_extractor, "PdfReader", return_value=_reader("", "A long enough text layer here")), \
            patch.object(pdf_extractor, "convert_from_bytes", return_value=["image"]) as convert, \
            patch.object(pdf_extractor.pytesseract, "image_to_string", return_value="Scanned text"):
        texts, _, ocr_pages = extract_pages(b"%PDF")

    assert texts == ["Scanned text", "A long enough text layer here"]
    assert ocr_pages == [1]
    assert convert.call_args.kwargs["first_page"] == 1
