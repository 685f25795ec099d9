"""
Messages posted by the panel UI.

    {"command": "merge", "pdfPaths": [...]}
    {"command": "split", "pdfPath": "...", "pageRanges": [{"start": 1, "end": 3}]}

dispatch() is the only entry point. Each command is answered with
notifications, never with a structured result.
"""
import logging
import os
from typing import Callable, Dict, List, Literal, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from services import notifications
from services.errors import PdfToolsError
from services.notifications import Notification
from services.pdf_service import PageRange, merge_pdfs, split_pdf
from services.workspace_store import TrackedFiles

logger = logging.getLogger(__name__)


class PageRangeIn(BaseModel):
    start: int
    end: int


class MergeMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: Literal["merge"]
    pdf_paths: List[str] = Field(alias="pdfPaths")


class SplitMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: Literal["split"]
    pdf_path: str = Field(alias="pdfPath")
    page_ranges: List[PageRangeIn] = Field(alias="pageRanges")


def handle_merge(message: MergeMessage, tracked_files: TrackedFiles) -> List[Notification]:
    if len(message.pdf_paths) < 2:
        return [notifications.info("Please select at least two PDF files to merge.")]
    try:
        output_path = merge_pdfs(message.pdf_paths)
    except PdfToolsError as e:
        logger.error(f"Error merging PDFs: {e}")
        return [notifications.error("Error merging PDFs", e)]
    return [
        notifications.info(
            f"PDFs merged successfully! Output saved to: {os.path.basename(output_path)}",
            actions=["Open"],
        )
    ]


def handle_split(message: SplitMessage, tracked_files: TrackedFiles) -> List[Notification]:
    # Panel ranges are not bounds-checked; split_pdf skips missing pages
    page_ranges = [PageRange(r.start, r.end) for r in message.page_ranges]
    try:
        output_paths = split_pdf(message.pdf_path, page_ranges)
    except PdfToolsError as e:
        logger.error(f"Error splitting PDF: {e}")
        return [notifications.error("Error splitting PDF", e)]

    for path in output_paths:
        tracked_files.add(path)
    return [
        notifications.info(
            f"PDF split successfully into {len(output_paths)} files!",
            actions=["Open Folder", "Open PDFs"],
        )
    ]


Handler = Callable[[BaseModel, TrackedFiles], List[Notification]]

HANDLERS: Dict[str, Tuple[Type[BaseModel], Handler]] = {
    "merge": (MergeMessage, handle_merge),
    "split": (SplitMessage, handle_split),
}


def dispatch(message: dict, tracked_files: TrackedFiles) -> List[Notification]:
    command = message.get("command")
    if command not in HANDLERS:
        logger.warning(f"Unknown panel command: {command!r}")
        return [Notification(level="error", message=f"Unknown command: {command}")]

    model, handler = HANDLERS[command]
    try:
        parsed = model.model_validate(message)
    except ValidationError as e:
        return [notifications.error(f"Invalid {command} message", e)]
    return handler(parsed, tracked_files)
