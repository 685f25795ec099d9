"""
Workspace-scoped persistence for the list of added PDF files.

KeyValueStore is the seam: JsonFileStore keeps values in one JSON file,
MemoryStore is handy for tests. TrackedFiles never touches the disk layout
directly, and the PDF transform functions never read TrackedFiles.
"""
import json
import logging
import os
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def update(self, key: str, value: Any) -> None: ...


class MemoryStore:
    def __init__(self, initial: Dict[str, Any] = None):
        self._data = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def update(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore:
    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable workspace state {self.path}: {e}")
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def update(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


class TrackedFiles:
    """Ordered, de-duplicated list of PDF paths the user has added."""

    def __init__(self, store: KeyValueStore, key: str = "pdfFiles"):
        self.store = store
        self.key = key
        self._paths: List[str] = []
        self.load()

    def load(self) -> List[str]:
        # Files deleted since the last session are dropped silently
        saved = self.store.get(self.key, []) or []
        self._paths = []
        for path in saved:
            if os.path.exists(path) and path not in self._paths:
                self._paths.append(path)
        return self.list()

    def add(self, path: str) -> bool:
        if path in self._paths:
            return False
        self._paths.append(path)
        self._save()
        return True

    def remove(self, path: str) -> bool:
        if path not in self._paths:
            return False
        self._paths.remove(path)
        self._save()
        return True

    def list(self) -> List[str]:
        return list(self._paths)

    def _save(self) -> None:
        self.store.update(self.key, self.list())
