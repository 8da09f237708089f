# tsebo/resume.py
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import pdfplumber
from docx import Document
from PyPDF2 import PdfReader

from tsebo.config import UploadLimits
from tsebo.exceptions import DecodeError, DocumentTooLargeError, UnsupportedDocumentError

logger = logging.getLogger(__name__)


def check_upload(content: bytes, filename: str, limits: Optional[UploadLimits] = None) -> str:
    """Validate type and size; returns the lowercased suffix."""
    limits = limits or UploadLimits()
    suffix = Path(filename or "").suffix.lower()
    if suffix not in limits.allowed_suffixes:
        raise UnsupportedDocumentError(filename=filename)
    if len(content) > limits.max_bytes:
        raise DocumentTooLargeError(len(content), limits.max_bytes, filename=filename)
    return suffix


def _pdf_text(content: bytes) -> str:
    # pdfplumber first, PyPDF2 for files its parser chokes on
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            return "\n".join((page.extract_text() or "") for page in pdf.pages)
    except Exception as e:
        logger.debug(f"pdfplumber failed ({e}), retrying with PyPDF2")

    reader = PdfReader(io.BytesIO(content))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def _docx_text(content: bytes) -> str:
    doc = Document(io.BytesIO(content))
    lines = [p.text for p in doc.paragraphs]
    # skills and contact blocks are often laid out as tables
    for table in doc.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(lines)


def decode_document(content: bytes, filename: str, limits: Optional[UploadLimits] = None) -> str:
    suffix = check_upload(content, filename, limits)
    try:
        text = _pdf_text(content) if suffix == ".pdf" else _docx_text(content)
    except Exception as e:
        kind = "PDF" if suffix == ".pdf" else "DOCX"
        logger.error(f"Error extracting text from {kind} {filename}: {e}")
        raise DecodeError(
            f"Failed to parse {kind} file. Please ensure the file is not corrupted.",
            filename=filename,
            cause=e,
        ) from e

    logger.debug(f"Decoded {filename}: {len(text)} chars")
    return text


def read_document(path: str) -> bytes:
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Resume not found: {p}")
    return p.read_bytes()

