from functools import lru_cache

from config import TRACKED_FILES_KEY, WORKSPACE_STATE_FILE
from services.preview import PreviewRegistry
from services.workspace_store import JsonFileStore, TrackedFiles


@lru_cache
def get_tracked_files() -> TrackedFiles:
    return TrackedFiles(JsonFileStore(WORKSPACE_STATE_FILE), TRACKED_FILES_KEY)


@lru_cache
def get_preview_registry() -> PreviewRegistry:
    return PreviewRegistry()
