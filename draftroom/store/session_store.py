"""Draft session storage.

A store keeps one record per draft id and offers a conditional write:
`replace` only succeeds when the stored version still equals the version
the caller read. That primitive is what arbitrates concurrent writers;
the engine itself holds no locks.

Two implementations are provided:
- InMemorySessionStore: a dict of draft_id -> record, for tests and
  single-process deployments.
- JsonFileSessionStore: one JSON file per draft under a data directory.
  Conditional writes hold a per-draft file lock, and records land via a
  unique temp file and os.replace so readers never see a partial record.

Both return fresh model instances on every read, so callers can mutate
what they load without touching stored state.
"""

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from filelock import FileLock, Timeout

from ..datamodels.draft_state import DraftSession


logger = logging.getLogger(__name__)


class VersionConflict(Exception):
    """Raised by a store when a conditional write loses the race."""

    def __init__(self, draft_id: str, expected_version: int, actual_version: Optional[int]):
        self.draft_id = draft_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Draft {draft_id}: expected version {expected_version}, found {actual_version}"
        )


class SessionStore(ABC):
    """Read/modify/write store for draft sessions keyed by draft id."""

    @abstractmethod
    def get(self, draft_id: str) -> Optional[DraftSession]:
        """Return a snapshot of the stored draft, or None."""

    @abstractmethod
    def insert(self, session: DraftSession) -> None:
        """Store a new draft. Raises VersionConflict if the id already exists."""

    @abstractmethod
    def replace(self, session: DraftSession, expected_version: int) -> None:
        """
        Overwrite a draft only if its stored version equals expected_version.

        Raises VersionConflict otherwise (including when the draft is gone).
        """


class InMemorySessionStore(SessionStore):
    """Dict-backed store. The lock only makes compare-and-set atomic."""

    def __init__(self) -> None:
        self._records: Dict[str, dict] = {}
        self._lock = threading.Lock()

    def get(self, draft_id: str) -> Optional[DraftSession]:
        with self._lock:
            record = self._records.get(draft_id)
        if record is None:
            return None
        return DraftSession.from_record(record)

    def insert(self, session: DraftSession) -> None:
        record = session.to_record()
        with self._lock:
            if session.draft_id in self._records:
                raise VersionConflict(session.draft_id, 0, self._records[session.draft_id]["version"])
            self._records[session.draft_id] = record

    def replace(self, session: DraftSession, expected_version: int) -> None:
        record = session.to_record()
        with self._lock:
            current = self._records.get(session.draft_id)
            actual = current["version"] if current is not None else None
            if actual != expected_version:
                raise VersionConflict(session.draft_id, expected_version, actual)
            self._records[session.draft_id] = record

    def __len__(self) -> int:
        return len(self._records)


class JsonFileSessionStore(SessionStore):
    """File-backed store, safe to share between processes.

    Parameters
    ----------
    data_dir:
        Directory holding `<draft_id>.json` files. Created if missing.
    lock_timeout:
        Seconds to wait for another writer's lock on the same draft before
        reporting the write as a version conflict.

    The version check and the write run under an OS-level lock on
    `<draft_id>.json.lock`, so every store instance pointed at the same
    directory is arbitrated by the same conditional write.
    """

    def __init__(self, data_dir: Union[str, Path], lock_timeout: float = 10.0) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._lock_timeout = lock_timeout

    def _path(self, draft_id: str) -> Path:
        # Draft ids are generated UUIDs; refuse anything that could escape the directory
        if not draft_id or "/" in draft_id or "\\" in draft_id or draft_id.startswith("."):
            raise ValueError(f"Invalid draft id: {draft_id!r}")
        return self._data_dir / f"{draft_id}.json"

    @contextmanager
    def _locked(self, draft_id: str, path: Path) -> Iterator[None]:
        lock = FileLock(str(path.with_suffix(".json.lock")), timeout=self._lock_timeout)
        try:
            lock.acquire()
        except Timeout:
            logger.warning(f"Timed out waiting for write lock on draft {draft_id}")
            raise VersionConflict(draft_id, -1, None)
        try:
            yield
        finally:
            lock.release()

    def _read(self, path: Path) -> Optional[dict]:
        if not path.is_file():
            return None
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, path: Path, record: dict) -> None:
        with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self._data_dir,
                                         prefix=f".{path.stem}.", suffix=".tmp",
                                         delete=False) as f:
            tmp_path = f.name
            json.dump(record, f, ensure_ascii=False, indent=2)
        try:
            os.replace(tmp_path, path)
        except OSError:
            os.unlink(tmp_path)
            raise

    def get(self, draft_id: str) -> Optional[DraftSession]:
        try:
            path = self._path(draft_id)
        except ValueError:
            return None

        record = self._read(path)
        if record is None:
            return None
        return DraftSession.from_record(record)

    def insert(self, session: DraftSession) -> None:
        path = self._path(session.draft_id)
        with self._locked(session.draft_id, path):
            existing = self._read(path)
            if existing is not None:
                raise VersionConflict(session.draft_id, 0, existing.get("version"))
            self._write(path, session.to_record())

    def replace(self, session: DraftSession, expected_version: int) -> None:
        path = self._path(session.draft_id)
        with self._locked(session.draft_id, path):
            current = self._read(path)
            actual = current.get("version") if current is not None else None
            if actual != expected_version:
                raise VersionConflict(session.draft_id, expected_version, actual)
            self._write(path, session.to_record())
