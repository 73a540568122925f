"""Tests for resume text extraction."""

from io import BytesIO

import fitz
import pytest
from docx import Document

from resume_matcher_api.core import TextExtractionError, extract_text
from resume_matcher_api.core.text_extractor import DOC_TYPE, DOCX_TYPE, PDF_TYPE


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    content = doc.tobytes()
    doc.close()
    return content


def make_docx(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_extract_pdf():
    assert "Jane Doe Backend Engineer" in extract_text(make_pdf("Jane Doe Backend Engineer"), PDF_TYPE)


def test_extract_docx_skips_blank_paragraphs():
    content = make_docx("Jane Doe", "   ", "Backend Engineer")

    assert extract_text(content, DOCX_TYPE) == "Jane Doe\nBackend Engineer"


@pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/webp"])
def test_images_have_no_text(content_type):
    assert extract_text(b"\x89PNG\r\n", content_type) == ""


def test_corrupt_pdf_raises():
    with pytest.raises(TextExtractionError):
        extract_text(b"definitely not a pdf", PDF_TYPE)


@pytest.mark.parametrize("content_type", ["text/plain", "text/rtf", None])
def test_unsupported_type_raises(content_type):
    with pytest.raises(TextExtractionError):
        extract_text(b"data", content_type)


def test_msword_upload_uses_word_parser():
    assert extract_text(make_docx("Jane Doe"), DOC_TYPE) == "Jane Doe"


def test_legacy_binary_doc_raises():
    with pytest.raises(TextExtractionError):
        extract_text(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 64, DOC_TYPE)
