"""JSON document store for conquest entities."""

from __future__ import annotations

import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import TypeAdapter

from conquest.errors import EntityNotFoundError, StaleWriteError

T = TypeVar("T")


class JsonDocumentStore:
    """Persist each entity as its own JSON document on disk.

    Documents live at ``<base>/<collection>/<id>.json``.  There are no
    multi-document transactions.  Every write goes to a temporary file in the
    same directory and is renamed into place with :func:`os.replace`, so a
    reader sees either the previous revision or the new one, never a partial
    file.

    :meth:`save` is a conditional update on the document's ``version`` so a
    writer holding a stale copy fails loudly instead of silently overwriting a
    newer revision.  The version check and the rename are serialized by a
    lock owned by this store instance: the guarantee holds for every writer
    sharing one store, not for separate processes pointed at the same
    directory.
    """

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapters: dict[type, TypeAdapter[Any]] = {}
        self._write_lock = threading.Lock()

    def _adapter(self, kind: type[T]) -> TypeAdapter[T]:
        adapter = self._adapters.get(kind)
        if adapter is None:
            adapter = TypeAdapter(kind)
            self._adapters[kind] = adapter
        return adapter

    def _dir_for(self, kind: type) -> Path:
        return self.base_path / kind.collection

    def _path_for(self, kind: type, entity_id: str) -> Path:
        return self._dir_for(kind) / f"{entity_id}.json"

    @staticmethod
    def _read(path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, payload: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # dot-prefixed and not *.json, so find() never picks it up
        tmp = path.with_name(f".{path.name}.{uuid4().hex}.tmp")
        try:
            tmp.write_bytes(payload)
            os.replace(tmp, path)
        finally:
            tmp.unlink(missing_ok=True)

    def get(self, kind: type[T], entity_id: str) -> T | None:
        """Load a document or return ``None`` when it does not exist."""

        raw = self._read(self._path_for(kind, entity_id))
        if raw is None:
            return None
        return self._adapter(kind).validate_json(raw)

    def require(self, kind: type[T], entity_id: str) -> T:
        """Load a document or raise :class:`EntityNotFoundError`."""

        document = self.get(kind, entity_id)
        if document is None:
            raise EntityNotFoundError(kind.__name__, entity_id)
        return document

    def find(self, kind: type[T], predicate: Callable[[T], bool] | None = None) -> list[T]:
        """Return every document of ``kind`` matching ``predicate``, ordered by id."""

        directory = self._dir_for(kind)
        if not directory.exists():
            return []
        adapter = self._adapter(kind)
        documents: list[T] = []
        for path in sorted(directory.glob("*.json")):
            raw = self._read(path)
            if raw is None:
                # deleted since the directory was listed
                continue
            document = adapter.validate_json(raw)
            if predicate is None or predicate(document):
                documents.append(document)
        return documents

    def find_one(self, kind: type[T], predicate: Callable[[T], bool]) -> T | None:
        matches = self.find(kind, predicate)
        return matches[0] if matches else None

    def save(self, document: T) -> T:
        """Write ``document`` if nobody else wrote it since it was loaded.

        New documents start at version 0.  On success the in-memory version is
        bumped to match what was written.
        """

        kind = type(document)
        path = self._path_for(kind, document.id)
        with self._write_lock:
            raw = self._read(path)
            found = 0 if raw is None else self._adapter(kind).validate_json(raw).version
            if found != document.version:
                raise StaleWriteError(kind.collection, document.id, document.version, found)
            document.version += 1
            try:
                self._write(path, self._adapter(kind).dump_json(document, indent=2))
            except Exception:
                document.version -= 1
                raise
        return document

    def delete(self, kind: type, entity_id: str) -> None:
        """Remove a document if it exists."""

        path = self._path_for(kind, entity_id)
        with self._write_lock:
            path.unlink(missing_ok=True)
