from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from dependencies import get_preview_registry
from services.errors import ReadError
from services.pdf_service import get_pdf_info
from services.preview import PreviewRegistry, PreviewSession, apply_selection

router = APIRouter(prefix="/preview", tags=["preview"])


class OpenRequest(BaseModel):
    path: str


class SelectionRequest(BaseModel):
    paths: List[str]


def _session(panel_id: str, registry: PreviewRegistry) -> PreviewSession:
    if panel_id not in registry:
        raise HTTPException(404, "Preview panel not found")
    return registry.get(panel_id)


def _page_count(pdf_path: str) -> int:
    try:
        return get_pdf_info(pdf_path)["total_pages"]
    except ReadError as e:
        raise HTTPException(400, f"Error opening PDF: {e}")


@router.post("/{panel_id}")
async def show_panel(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    return registry.show(panel_id).state()


@router.get("/{panel_id}")
async def get_state(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    return _session(panel_id, registry).state()


@router.delete("/{panel_id}")
async def close_panel(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    _session(panel_id, registry)
    registry.close(panel_id)
    return {"closed": panel_id}


@router.post("/{panel_id}/open")
async def open_document(
    panel_id: str, req: OpenRequest, registry: PreviewRegistry = Depends(get_preview_registry)
):
    session = _session(panel_id, registry)
    try:
        session.open(req.path, _page_count(req.path))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return session.state()


@router.post("/{panel_id}/next")
async def next_page(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    session = _session(panel_id, registry)
    session.next_page()
    return session.state()


@router.post("/{panel_id}/previous")
async def previous_page(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    session = _session(panel_id, registry)
    session.previous_page()
    return session.state()


@router.post("/{panel_id}/selection")
async def select(
    panel_id: str, req: SelectionRequest, registry: PreviewRegistry = Depends(get_preview_registry)
):
    session = _session(panel_id, registry)
    try:
        selection = apply_selection(session, req.paths, _page_count)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return selection._asdict()


@router.get("/{panel_id}/image")
async def get_image(panel_id: str, registry: PreviewRegistry = Depends(get_preview_registry)):
    session = _session(panel_id, registry)
    await session.wait_idle()
    if session.image is None:
        raise HTTPException(404, session.last_error or "No page rendered")
    return Response(
        content=session.image,
        media_type="image/png",
        headers={"X-Preview-Page": str(session.rendered_page)},
    )
