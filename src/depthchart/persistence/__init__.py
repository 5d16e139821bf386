"""Snapshot storage backing the ranking store and player directory.

Every resource (a team's chart, the player directory, the position catalog,
the team list) is read and written as one whole JSON snapshot. Backends
replace a snapshot atomically so concurrent readers never see a partial write.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import sqlite3
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional


logger = logging.getLogger(__name__)

PLAYERS_RESOURCE = "players"
POSITIONS_RESOURCE = "positions"
TEAMS_RESOURCE = "teams"


def team_chart_resource(team_id: str) -> str:
    return f"depthcharts-{team_id.lower()}"


class StorageError(RuntimeError):
    """Raised when a snapshot cannot be read, decoded or written."""

    def __init__(self, resource: str, message: str):
        super().__init__(f"{resource}: {message}")
        self.resource = resource


class SnapshotStore:
    """Base class for snapshot backends.

    Subclasses implement ``_read`` and ``_write``. The store-wide lock is
    re-entrant so a caller holding it for a load-mutate-save cycle can still
    call ``load``/``save``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def load(self, name: str) -> Optional[Any]:
        """Return the stored snapshot for ``name``, or None when it does not exist."""

        with self._lock:
            return self._read(name)

    def save(self, name: str, payload: Any) -> None:
        with self._lock:
            self._write(name, payload)

    def _read(self, name: str) -> Optional[Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _write(self, name: str, payload: Any) -> None:  # pragma: no cover - abstract
        raise NotImplementedError


class MemorySnapshotStore(SnapshotStore):
    """Process-local store; snapshots are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def _read(self, name: str) -> Optional[Any]:
        if name not in self._data:
            return None
        return copy.deepcopy(self._data[name])

    def _write(self, name: str, payload: Any) -> None:
        try:
            # Round-trip through JSON so memory and durable backends accept the same payloads.
            self._data[name] = json.loads(json.dumps(payload))
        except (TypeError, ValueError) as exc:
            raise StorageError(name, f"payload is not JSON serializable: {exc}") from exc


class SqliteSnapshotStore(SnapshotStore):
    """SQLite-backed store, one row per snapshot."""

    def __init__(self, db_path: Path | str):
        super().__init__()
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(str(self.db_path), f"cannot open database: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS snapshots (
                        name TEXT PRIMARY KEY,
                        payload_json TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise StorageError(str(self.db_path), f"cannot create schema: {exc}") from exc
        finally:
            conn.close()

    def _read(self, name: str) -> Optional[Any]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT payload_json FROM snapshots WHERE name = ?",
                (name,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(name, f"read failed: {exc}") from exc
        finally:
            conn.close()
        if row is None:
            return None
        try:
            return json.loads(row["payload_json"])
        except json.JSONDecodeError as exc:
            raise StorageError(name, f"corrupt snapshot: {exc}") from exc

    def _write(self, name: str, payload: Any) -> None:
        try:
            payload_json = json.dumps(payload)
        except (TypeError, ValueError) as exc:
            raise StorageError(name, f"payload is not JSON serializable: {exc}") from exc
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO snapshots (name, payload_json, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(name) DO UPDATE SET
                        payload_json = excluded.payload_json,
                        updated_at = excluded.updated_at
                    """,
                    (name, payload_json, now),
                )
        except sqlite3.Error as exc:
            raise StorageError(name, f"write failed: {exc}") from exc
        finally:
            conn.close()


class JsonDirectorySnapshotStore(SnapshotStore):
    """One pretty-printed ``<name>.json`` file per snapshot inside a directory."""

    def __init__(self, directory: Path | str):
        super().__init__()
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(str(self.directory), f"cannot create data directory: {exc}") from exc

    def _path(self, name: str) -> Path:
        # Snapshot names must stay a single file inside the data directory.
        if not name or name.startswith(".") or "/" in name or "\\" in name:
            raise StorageError(name, "resource name is not a valid file name")
        return self.directory / f"{name}.json"

    def _read(self, name: str) -> Optional[Any]:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StorageError(name, f"read failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageError(name, f"corrupt snapshot: {exc}") from exc

    def _write(self, name: str, payload: Any) -> None:
        try:
            text = json.dumps(payload, indent=2)
        except (TypeError, ValueError) as exc:
            raise StorageError(name, f"payload is not JSON serializable: {exc}") from exc
        path = self._path(name)
        tmp = None
        try:
            tmp = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{name}.",
                suffix=".tmp",
                delete=False,
            )
            try:
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            finally:
                tmp.close()
            os.replace(tmp.name, path)
        except OSError as exc:
            if tmp is not None:
                Path(tmp.name).unlink(missing_ok=True)
            raise StorageError(name, f"write failed: {exc}") from exc



def open_storage(backend: str, *, db_path: Path | str | None = None, data_dir: Path | str | None = None) -> SnapshotStore:
    """Build a backend by name (``memory``, ``sqlite`` or ``json``)."""

    kind = backend.strip().lower()
    if kind == "memory":
        store: SnapshotStore = MemorySnapshotStore()
    elif kind == "sqlite":
        if db_path is None:
            raise ValueError("sqlite storage requires db_path")
        store = SqliteSnapshotStore(db_path)
    elif kind == "json":
        if data_dir is None:
            raise ValueError("json storage requires data_dir")
        store = JsonDirectorySnapshotStore(data_dir)
    else:
        raise ValueError(f"Unknown storage backend {backend!r}; expected memory, sqlite or json")
    logger.info("Using %s snapshot storage", kind)
    return store


__all__ = [
    "JsonDirectorySnapshotStore",
    "MemorySnapshotStore",
    "PLAYERS_RESOURCE",
    "POSITIONS_RESOURCE",
    "SnapshotStore",
    "SqliteSnapshotStore",
    "StorageError",
    "TEAMS_RESOURCE",
    "open_storage",
    "team_chart_resource",
]
