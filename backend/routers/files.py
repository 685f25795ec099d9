import os
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from dependencies import get_tracked_files
from services import notifications
from services.workspace_store import TrackedFiles

router = APIRouter(prefix="/files", tags=["files"])


class AddFilesRequest(BaseModel):
    paths: List[str]  # absolute paths from the file picker


@router.get("")
def list_files(tracked_files: TrackedFiles = Depends(get_tracked_files)):
    return {"files": tracked_files.list()}


@router.post("")
def add_files(req: AddFilesRequest, tracked_files: TrackedFiles = Depends(get_tracked_files)):
    if not req.paths:
        return {"files": tracked_files.list(), "notifications": []}

    for path in req.paths:
        tracked_files.add(path)
    notice = notifications.info(f"Added {len(req.paths)} PDF file(s) to the workspace.")
    return {"files": tracked_files.list(), "notifications": [notice.model_dump()]}


@router.delete("")
def remove_file(path: str, tracked_files: TrackedFiles = Depends(get_tracked_files)):
    if not tracked_files.remove(path):
        raise HTTPException(404, f"Not a tracked PDF file: {path}")
    notice = notifications.info(f"Removed PDF file: {os.path.basename(path)}")
    return {"files": tracked_files.list(), "notifications": [notice.model_dump()]}
