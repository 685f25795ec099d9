from typing import List, Literal

from pydantic import BaseModel


class Notification(BaseModel):
    level: Literal["info", "warning", "error"]
    message: str
    # Button labels the panel may offer, e.g. "Open" or "Open Folder"
    actions: List[str] = []


def info(message: str, actions: List[str] = None) -> Notification:
    return Notification(level="info", message=message, actions=actions or [])


def warning(message: str) -> Notification:
    return Notification(level="warning", message=message)


def error(prefix: str, cause: Exception) -> Notification:
    return Notification(level="error", message=f"{prefix}: {cause}")
