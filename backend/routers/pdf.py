import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from config import THUMBNAIL_SCALE
from dependencies import get_tracked_files
from services import notifications
from services.errors import PdfToolsError, RangeInputError, ReadError
from services.page_ranges import parse_page_ranges, validate_page_ranges
from services.pdf_service import (
    check_document_size,
    get_page_thumbnail,
    get_pdf_info,
    merge_pdfs,
    split_pdf,
)
from services.workspace_store import TrackedFiles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pdf", tags=["pdf"])


class MergeRequest(BaseModel):
    paths: Optional[List[str]] = None  # falls back to the tracked files


class SplitRequest(BaseModel):
    path: str
    ranges: str  # e.g. "1-3, 4-6"


class ValidateRangesRequest(BaseModel):
    text: str
    page_count: Optional[int] = None


def _page_count(pdf_path: str) -> int:
    try:
        return get_pdf_info(pdf_path)["total_pages"]
    except ReadError as e:
        logger.error(f"Error processing PDF: {e}")
        raise HTTPException(400, f"Error processing PDF: {e}")


@router.post("/merge")
def merge(req: MergeRequest, tracked_files: TrackedFiles = Depends(get_tracked_files)):
    pdf_paths = req.paths if req.paths is not None else tracked_files.list()
    if len(pdf_paths) < 2:
        notice = notifications.info("Please select at least two PDF files to merge.")
        return {"output_path": None, "notifications": [notice.model_dump()]}

    try:
        output_path = merge_pdfs(pdf_paths)
    except PdfToolsError as e:
        logger.error(f"Error merging PDFs: {e}")
        raise HTTPException(400, f"Error merging PDFs: {e}")

    notice = notifications.info(
        f"PDFs merged successfully! Output saved to: {os.path.basename(output_path)}",
        actions=["Open"],
    )
    return {"output_path": output_path, "notifications": [notice.model_dump()]}


@router.post("/split")
def split(req: SplitRequest, tracked_files: TrackedFiles = Depends(get_tracked_files)):
    page_count = _page_count(req.path)
    warnings = [notifications.warning(w) for w in check_document_size(req.path, page_count)]

    try:
        page_ranges = parse_page_ranges(req.ranges, page_count)
    except RangeInputError as e:
        raise HTTPException(400, str(e))

    try:
        output_paths = split_pdf(req.path, page_ranges)
    except PdfToolsError as e:
        logger.error(f"Error splitting PDF: {e}")
        raise HTTPException(400, f"Error splitting PDF: {e}")

    for path in output_paths:
        tracked_files.add(path)

    notice = notifications.info(
        f"PDF split successfully into {len(output_paths)} files!",
        actions=["Open Folder", "Open PDFs"],
    )
    return {
        "output_paths": output_paths,
        "notifications": [n.model_dump() for n in warnings + [notice]],
    }


@router.get("/info")
def info(path: str):
    page_count = _page_count(path)
    return {"total_pages": page_count, "warnings": check_document_size(path, page_count)}


@router.get("/thumbnail")
def thumbnail(path: str, page: int, scale: float = THUMBNAIL_SCALE):
    """page is 1-indexed"""
    try:
        img = get_page_thumbnail(path, page - 1, scale)
    except (ValueError, ReadError) as e:
        raise HTTPException(400, str(e))
    return Response(content=img, media_type="image/png")


@router.post("/ranges/validate")
def validate_ranges(req: ValidateRangesRequest):
    message = validate_page_ranges(req.text, req.page_count)
    return {"valid": message is None, "message": message}
