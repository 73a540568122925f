"""Plain-text extraction from uploaded resumes."""

import logging
from io import BytesIO

import fitz  # PyMuPDF
from docx import Document

logger = logging.getLogger(__name__)

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_TYPE = "application/msword"


class TextExtractionError(Exception):
    """Raised when a file's text cannot be extracted."""

    pass


def extract_pdf_text(content: bytes) -> str:
    with fitz.open(stream=content, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc).strip()


def extract_docx_text(content: bytes) -> str:
    document = Document(BytesIO(content))
    return "\n".join(p.text for p in document.paragraphs if p.text.strip())


def extract_text(content: bytes, content_type: str | None) -> str:
    """
    Extract text from an uploaded file.

    Images carry no extractable text and return an empty string.

    Raises:
        TextExtractionError: If the type is unsupported or the file is unreadable
    """
    if content_type and content_type.startswith("image/"):
        return ""

    try:
        if content_type == PDF_TYPE:
            return extract_pdf_text(content)
        if content_type in (DOCX_TYPE, DOC_TYPE):
            return extract_docx_text(content)
    except Exception as e:
        logger.error(f"Failed to extract text from {content_type}: {e}")
        raise TextExtractionError(f"Failed to extract text from {content_type}") from e

    raise TextExtractionError(f"Text extraction is not supported for {content_type}")
