"""
Resume Upload - turn an uploaded resume into plain text.

Readers per extension:
- .pdf  -> PyPDF2, page by page
- .docx -> python-docx, paragraphs then table rows
- .txt  -> decoded as UTF-8, falling back to cp1252 / latin-1

The size limit is max_upload_size_mb from settings. Whatever text comes
out is what skill extraction and skill density work on.
"""

import io
import logging
import zipfile
from typing import Callable, Dict, NamedTuple

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from fastapi import UploadFile, HTTPException
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from talentflow.core.config import get_settings

logger = logging.getLogger(__name__)


class ResumeText(NamedTuple):
    text: str
    filename: str

    @property
    def word_count(self) -> int:
        # Same whitespace split the density calculation uses
        return len(self.text.split())


def get_file_extension(filename: str) -> str:
    """Lowercase extension with the dot, '' when there is none."""
    _, dot, ext = filename.rpartition('.')
    return '.' + ext.lower() if dot else ''


def read_pdf(content: bytes) -> str:
    try:
        pages = PdfReader(io.BytesIO(content)).pages
        return '\n'.join(filter(None, (page.extract_text() for page in pages)))
    except PdfReadError as e:
        raise HTTPException(status_code=400, detail=f"Could not read PDF resume: {e}")


def read_docx(content: bytes) -> str:
    try:
        document = Document(io.BytesIO(content))
    except (zipfile.BadZipFile, PackageNotFoundError, KeyError) as e:
        raise HTTPException(status_code=400, detail=f"Could not read DOCX resume: {e}")

    lines = [p.text for p in document.paragraphs if p.text.strip()]
    # Skills are often laid out in tables
    for table in document.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                lines.append(' | '.join(cells))
    return '\n'.join(lines)


def read_txt(content: bytes) -> str:
    for encoding in ('utf-8', 'cp1252'):
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            pass
    # latin-1 maps every byte
    return content.decode('latin-1')


RESUME_READERS: Dict[str, Callable[[bytes], str]] = {
    '.pdf': read_pdf,
    '.docx': read_docx,
    '.txt': read_txt,
}

FORMAT_NAMES = {'.pdf': "PDF", '.docx': "Word Document", '.txt': "Plain Text"}


async def read_resume(file: UploadFile) -> ResumeText:
    """
    Validate an uploaded resume and extract its text.

    Raises:
        HTTPException 400: no filename, unsupported type, unreadable or empty file
        HTTPException 413: larger than max_upload_size_mb
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    reader = RESUME_READERS.get(get_file_extension(file.filename))
    if reader is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported resume type '{file.filename}'. Allowed: PDF, DOCX, TXT"
        )

    content = await file.read()
    limit_mb = get_settings().max_upload_size_mb
    if len(content) > limit_mb * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"Resume too large. Maximum size: {limit_mb}MB")

    text = reader(content)
    if not text.strip():
        raise HTTPException(status_code=400, detail="No text found in resume. File may be empty or scanned.")

    logger.debug("Read %d characters from resume %s", len(text), file.filename)
    return ResumeText(text=text, filename=file.filename)


def get_supported_formats() -> dict:
    """Resume formats the upload endpoint accepts."""
    return {
        "supported_formats": [
            {"extension": ext, "name": FORMAT_NAMES[ext]} for ext in RESUME_READERS
        ],
        "max_size_mb": get_settings().max_upload_size_mb
    }
