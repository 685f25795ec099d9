"""
Single-document, single-page preview sessions.

A session is Empty until a document is opened, then shows one page at a time.
Navigation past either end is ignored. Only one render runs per session; a
request made while a render is in flight replaces the pending page, so pages
skipped over during a slow render are never rendered.

Everything runs on the event loop. There are no locks.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, NamedTuple, Optional

from config import THUMBNAIL_SCALE
from services.errors import PdfToolsError
from services.pdf_service import get_page_thumbnail, get_pdf_info

logger = logging.getLogger(__name__)

# (pdf_path, 1-indexed page) -> PNG bytes
Renderer = Callable[[str, int], Awaitable[bytes]]


async def render_page(pdf_path: str, page: int) -> bytes:
    return await asyncio.to_thread(get_page_thumbnail, pdf_path, page - 1, THUMBNAIL_SCALE)


class PreviewSession:
    def __init__(self, renderer: Renderer = render_page):
        self.renderer = renderer
        self.document_path: Optional[str] = None
        self.page_count = 0
        self.current_page = 0
        self.render_in_flight = False
        self.pending_page: Optional[int] = None
        self.rendered_page: Optional[int] = None
        self.image: Optional[bytes] = None
        self.last_error: Optional[str] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def is_loaded(self) -> bool:
        return self.document_path is not None

    def open(self, pdf_path: str, page_count: int) -> None:
        """Show pdf_path from page 1. Reopening the current document also restarts at 1."""
        if page_count < 1:
            raise ValueError(f"{pdf_path} has no pages to preview")
        self._reset()
        self.document_path = pdf_path
        self.page_count = page_count
        self.current_page = 1
        logger.debug(f"Preview opened {pdf_path} ({page_count} pages)")
        self.request_render(1)

    def close(self) -> None:
        self._reset()

    def next_page(self) -> int:
        if self.is_loaded and self.current_page < self.page_count:
            self.current_page += 1
            self.request_render(self.current_page)
        return self.current_page

    def previous_page(self) -> int:
        if self.is_loaded and self.current_page > 1:
            self.current_page -= 1
            self.request_render(self.current_page)
        return self.current_page

    def request_render(self, page: int) -> None:
        if self.render_in_flight:
            # Only the latest request survives
            self.pending_page = page
            return
        self.render_in_flight = True
        self._task = asyncio.get_running_loop().create_task(self._render_loop(page))

    async def wait_idle(self) -> None:
        while self._task is not None and not self._task.done():
            await self._task

    def state(self) -> dict:
        return {
            "document_path": self.document_path,
            "current_page": self.current_page,
            "page_count": self.page_count,
            "render_in_flight": self.render_in_flight,
            "pending_page": self.pending_page,
            "rendered_page": self.rendered_page,
            "last_error": self.last_error,
        }

    def _reset(self) -> None:
        # A render still in flight finishes, but its result is discarded
        self._generation += 1
        self.document_path = None
        self.page_count = 0
        self.current_page = 0
        self.pending_page = None
        self.rendered_page = None
        self.image = None
        self.last_error = None

    async def _render_loop(self, page: Optional[int]) -> None:
        try:
            while page is not None:
                generation = self._generation
                pdf_path = self.document_path
                try:
                    image = await self.renderer(pdf_path, page)
                except (PdfToolsError, ValueError, OSError, RuntimeError) as e:
                    logger.error(f"Failed to render page {page} of {pdf_path}: {e}")
                    if generation == self._generation:
                        self.last_error = str(e)
                else:
                    if generation == self._generation:
                        self.image = image
                        self.rendered_page = page
                        self.last_error = None
                page, self.pending_page = self.pending_page, None
        finally:
            self.render_in_flight = False


class Selection(NamedTuple):
    merge_enabled: bool
    split_enabled: bool
    displayed: Optional[str]


def apply_selection(
    session: PreviewSession,
    pdf_paths: List[str],
    page_count_for: Callable[[str], int] = lambda path: get_pdf_info(path)["total_pages"],
) -> Selection:
    """
    Exactly one selected file is shown in the preview. Any other selection
    leaves the preview alone and only changes which actions are available.
    """
    if len(pdf_paths) == 1 and pdf_paths[0] != session.document_path:
        session.open(pdf_paths[0], page_count_for(pdf_paths[0]))
    return Selection(
        merge_enabled=len(pdf_paths) >= 2,
        split_enabled=len(pdf_paths) == 1,
        displayed=session.document_path,
    )


class PreviewRegistry:
    """One live session per open panel."""

    def __init__(self, renderer: Renderer = render_page):
        self.renderer = renderer
        self._sessions: Dict[str, PreviewSession] = {}

    def show(self, panel_id: str) -> PreviewSession:
        session = self._sessions.get(panel_id)
        if session is None:
            session = PreviewSession(self.renderer)
            self._sessions[panel_id] = session
        else:
            session.close()
        return session

    def get(self, panel_id: str) -> PreviewSession:
        return self._sessions[panel_id]

    def close(self, panel_id: str) -> None:
        session = self._sessions.pop(panel_id, None)
        if session is not None:
            session.close()

    def __contains__(self, panel_id: str) -> bool:
        return panel_id in self._sessions
