from typing import Any, Dict

from fastapi import APIRouter, Depends

from dependencies import get_tracked_files
from services.panel_dispatch import dispatch
from services.workspace_store import TrackedFiles

router = APIRouter(prefix="/panel", tags=["panel"])


@router.post("/message")
def panel_message(message: Dict[str, Any], tracked_files: TrackedFiles = Depends(get_tracked_files)):
    return {"notifications": [n.model_dump() for n in dispatch(message, tracked_files)]}
