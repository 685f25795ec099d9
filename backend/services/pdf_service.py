import io
import logging
import os
from typing import List, NamedTuple

import fitz  # PyMuPDF
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from config import LARGE_FILE_BYTES, LARGE_PAGE_COUNT
from services.errors import ReadError, WriteError

logger = logging.getLogger(__name__)


class PageRange(NamedTuple):
    """1-indexed, inclusive, exactly as the user entered it."""
    start: int
    end: int


def _load_pdf(pdf_path: str) -> PdfReader:
    try:
        with open(pdf_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ReadError(pdf_path, e.strerror or str(e)) from e

    try:
        reader = PdfReader(io.BytesIO(data))
        # Touch the page tree so a broken file fails here, not halfway through a copy
        len(reader.pages)
    except (PyPdfError, ValueError, KeyError) as e:
        raise ReadError(pdf_path, str(e) or type(e).__name__) from e
    return reader


def _write_pdf(writer: PdfWriter, output_path: str) -> None:
    buffer = io.BytesIO()
    writer.write(buffer)
    try:
        with open(output_path, "wb") as f:
            f.write(buffer.getvalue())
    except OSError as e:
        raise WriteError(output_path, e.strerror or str(e)) from e


def _derived_path(pdf_path: str, suffix: str) -> str:
    base_dir = os.path.dirname(pdf_path)
    stem, ext = os.path.splitext(os.path.basename(pdf_path))
    return os.path.join(base_dir, f"{stem}_{suffix}{ext or '.pdf'}")


def merged_output_path(first_path: str) -> str:
    return _derived_path(first_path, "merged")


def split_output_path(pdf_path: str, page_range: PageRange) -> str:
    return _derived_path(pdf_path, f"{page_range.start}-{page_range.end}")


def select_pages(page_count: int, page_range: PageRange) -> List[int]:
    """1-indexed pages of page_range that exist in a document of page_count pages."""
    first = max(1, page_range.start)
    last = min(page_count, page_range.end)
    return list(range(first, last + 1))


def merge_pdfs(pdf_paths: List[str]) -> str:
    """
    Concatenate every page of every input, in list order.
    Returns the path of the merged file, named after the first input.
    """
    if not pdf_paths:
        raise ValueError("No PDF files to merge")

    # All inputs are loaded before anything is written
    readers = [_load_pdf(path) for path in pdf_paths]

    writer = PdfWriter()
    for reader in readers:
        for page in reader.pages:
            writer.add_page(page)

    output_path = merged_output_path(pdf_paths[0])
    _write_pdf(writer, output_path)
    logger.info(
        f"Merged {len(pdf_paths)} PDFs ({len(writer.pages)} pages) into {output_path}"
    )
    return output_path


def split_pdf(pdf_path: str, page_ranges: List[PageRange]) -> List[str]:
    """
    page_ranges: list of PageRange — 1-indexed, inclusive
    Returns one output path per range, in the same order.

    Pages outside the document are skipped; a range with no surviving pages
    still produces an empty PDF. Outputs written before a WriteError are kept.
    """
    src = _load_pdf(pdf_path)
    page_count = len(src.pages)

    output_paths = []
    for page_range in page_ranges:
        page_range = PageRange(*page_range)
        writer = PdfWriter()
        for page_num in select_pages(page_count, page_range):
            writer.add_page(src.pages[page_num - 1])

        output_path = split_output_path(pdf_path, page_range)
        _write_pdf(writer, output_path)
        logger.info(
            f"Created: {output_path} (Pages {page_range.start}-{page_range.end}, "
            f"{len(writer.pages)} kept)"
        )
        output_paths.append(output_path)
    return output_paths


def _open_document(pdf_path: str) -> fitz.Document:
    try:
        return fitz.open(pdf_path, filetype="pdf")
    except (RuntimeError, OSError, ValueError) as e:
        raise ReadError(pdf_path, str(e)) from e


def get_pdf_info(pdf_path: str) -> dict:
    doc = _open_document(pdf_path)
    info = {"total_pages": len(doc)}
    doc.close()
    return info


def get_page_thumbnail(pdf_path: str, page_num: int, scale: float = 0.4) -> bytes:
    """page_num is 0-indexed"""
    doc = _open_document(pdf_path)
    try:
        if page_num < 0 or page_num >= len(doc):
            raise ValueError(f"Page {page_num} out of range (0-{len(doc) - 1})")
        page = doc[page_num]
        mat = fitz.Matrix(scale, scale)
        pix = page.get_pixmap(matrix=mat)
        return pix.tobytes("png")
    finally:
        doc.close()


def check_document_size(pdf_path: str, page_count: int) -> List[str]:
    """Warnings for documents that will be slow to process. Nothing is refused."""
    warnings = []
    if os.path.getsize(pdf_path) > LARGE_FILE_BYTES:
        warnings.append("Processing large PDF file. This may take some time.")
    if page_count > LARGE_PAGE_COUNT:
        warnings.append("Processing PDFs with many pages may be slow")
    for warning in warnings:
        logger.warning(f"{pdf_path}: {warning}")
    return warnings
