"""Byte-level decoding of uploaded resumes (PDF via pdfplumber, DOCX via python-docx)."""

import io
import logging

import pdfplumber
from docx import Document

from config import settings
from services.errors import DecodeError

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"

SUPPORTED_MIME_TYPES = (PDF_MIME, DOCX_MIME)

_EXTENSION_MIME = {
    ".pdf": PDF_MIME,
    ".docx": DOCX_MIME,
    ".doc": DOC_MIME,
}

MIN_FILE_BYTES = 100
MIN_READABLE_CHARS = 10


def resolve_mime_type(filename: str | None, content_type: str | None) -> str:
    """Trust the declared content type unless it is generic; then go by extension."""
    if content_type and content_type not in ("application/octet-stream", ""):
        return content_type
    lower = (filename or "").lower()
    for extension, mime in _EXTENSION_MIME.items():
        if lower.endswith(extension):
            return mime
    return content_type or ""


def _extract_pdf(buffer: bytes) -> str:
    with pdfplumber.open(io.BytesIO(buffer)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def _extract_docx(buffer: bytes) -> str:
    doc = Document(io.BytesIO(buffer))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_text(buffer: bytes, mime_type: str) -> str:
    """Extract raw text from an uploaded document.

    Raises DecodeError with a specific code for unsupported, oversized,
    corrupt or empty documents.
    """
    if mime_type == DOC_MIME:
        raise DecodeError(
            "Legacy DOC files are not supported. Please use DOCX or PDF.",
            code="UNSUPPORTED_FILE_TYPE",
        )
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise DecodeError("Only PDF and DOCX files are supported", code="UNSUPPORTED_FILE_TYPE")

    if not buffer:
        raise DecodeError("No file provided", code="EMPTY_FILE")
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(buffer) > max_bytes:
        raise DecodeError(f"File too large (max {settings.max_upload_size_mb}MB)", code="FILE_TOO_LARGE")
    if len(buffer) < MIN_FILE_BYTES:
        raise DecodeError("File too small to be a resume", code="FILE_TOO_SMALL")

    try:
        if mime_type == PDF_MIME:
            text = _extract_pdf(buffer)
        else:
            text = _extract_docx(buffer)
    except Exception as e:
        kind = "PDF" if mime_type == PDF_MIME else "DOCX"
        logger.warning("Failed to parse %s upload: %s", kind, e)
        raise DecodeError(f"Corrupted or unreadable {kind} file") from e

    if len(text.strip()) < MIN_READABLE_CHARS:
        raise DecodeError("No readable content found in document", code="NO_READABLE_CONTENT")

    logger.info("Extracted %d chars from %s upload", len(text), mime_type)
    return text
