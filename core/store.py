"""Persistence for contact submissions.

Stores keep submissions newest first and never hold more than
``capacity`` records; inserting is the only mutation.  ``JsonFileStore``
keeps the whole list in one JSON file that is rewritten on every append.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from .errors import StorageError
from .types import Submission


DEFAULT_CAPACITY = 100


class SubmissionStore(Protocol):
    capacity: int

    def append(self, submission: Submission) -> None:
        ...

    def list(self, limit: Optional[int] = None) -> List[Submission]:
        ...


def _bounded(limit: Optional[int], capacity: int) -> int:
    if limit is None:
        return capacity
    return max(0, min(limit, capacity))


class MemoryStore:
    """In-process store used by tests and throwaway servers."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self.capacity = capacity
        self._items: List[Submission] = []
        self._lock = threading.Lock()

    def append(self, submission: Submission) -> None:
        with self._lock:
            self._items.insert(0, submission)
            del self._items[self.capacity:]

    def list(self, limit: Optional[int] = None) -> List[Submission]:
        with self._lock:
            return list(self._items[: _bounded(limit, self.capacity)])


class JsonFileStore:
    """Store the submission list as a single indented JSON document.

    A missing or empty file is an empty list.  Appends are a full
    read-modify-write; the lock serializes writers inside one process only,
    separate processes sharing the file can still lose updates.
    """

    def __init__(self, path: Path, capacity: int = DEFAULT_CAPACITY) -> None:
        self.path = Path(path)
        self.capacity = capacity
        self._lock = threading.Lock()

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read {self.path}", detail=str(exc)) from exc
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt submissions file {self.path}", detail=str(exc)) from exc
        if not isinstance(data, list):
            raise StorageError(f"Submissions file {self.path} does not hold a list")
        return [item for item in data if isinstance(item, dict)]

    def _save(self, records: List[Dict[str, Any]]) -> None:
        payload = json.dumps(records, indent=2)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(directory))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}", detail=str(exc)) from exc

    def append(self, submission: Submission) -> None:
        with self._lock:
            records = self._load()
            records.insert(0, submission.to_dict())
            self._save(records[: self.capacity])

    def list(self, limit: Optional[int] = None) -> List[Submission]:
        records = self._load()
        return [Submission.from_dict(item) for item in records[: _bounded(limit, self.capacity)]]
