# site_analyzer/services/pdf_extractor.py
from io import BytesIO
from typing import List, Tuple

from pypdf import PdfReader
from pdf2image import convert_from_bytes
import pytesseract

from site_analyzer.config import OCR_ENABLE, OCR_MIN_TEXT_CHARS, OCR_DPI, OCR_LANG


def extract_pages(pdf_bytes: bytes) -> Tuple[List[str], int, List[int]]:
    """
    Extract text from PDF pages.
    OCR fallback (when enabled) if a page's text is missing or too small.

    Returns:
    - page_texts (non-empty pages only)
    - page_count
    - ocr_pages
    """

    texts: List[str] = []
    ocr_pages: List[int] = []

    reader = PdfReader(BytesIO(pdf_bytes))
    page_count = len(reader.pages)

    for i, page in enumerate(reader.pages):
        page_num = i + 1

        # -------- normal extraction --------
        try:
            raw_text = (page.extract_text() or "").strip()
        except Exception:
            raw_text = ""

        final_text = raw_text

        # -------- OCR decision --------
        if OCR_ENABLE and len(raw_text) < OCR_MIN_TEXT_CHARS:
            try:
                images = convert_from_bytes(
                    pdf_bytes,
                    dpi=OCR_DPI,
                    first_page=page_num,
                    last_page=page_num,
                )

                ocr_text = pytesseract.image_to_string(
                    images[0],
                    lang=OCR_LANG
                ).strip()

                # prefer OCR if it gives more text
                if len(ocr_text) > len(raw_text):
                    final_text = ocr_text
                    ocr_pages.append(page_num)

            except Exception:
                pass

        if final_text:
            texts.append(final_text)

    return texts, page_count, ocr_pages


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Whole-document text; raises if the PDF cannot be parsed."""
    texts, _, _ = extract_pages(pdf_bytes)
    return "\n\n".join(texts).strip()
