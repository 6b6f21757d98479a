"""A flat document collection stored as one JSON file.

Every read-modify-write runs under the collection's lock, so operations on
one collection are serialised within a process.  Separate processes sharing
the same file are not coordinated; use the MongoDB store for that.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from stockroom.domain.exceptions import AlreadyExistsError, StorageError


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self.lock = threading.RLock()
        self._ensure_file()

    @property
    def name(self) -> str:
        return self._file_path.stem

    # --- Document operations --------------------------------------------------

    def insert(self, doc: dict[str, Any]) -> None:
        with self.lock:
            records = self.load()
            if any(raw["id"] == doc["id"] for raw in records):
                raise AlreadyExistsError(
                    f"Document '{doc['id']}' already exists in {self.name}"
                )
            records.append(doc)
            self.persist(records)

    def find(self, doc_id: str) -> dict[str, Any] | None:
        for raw in self.load():
            if raw["id"] == doc_id:
                return raw
        return None

    def set_fields(
        self,
        doc_id: str,
        fields: dict[str, Any],
        match: dict[str, Any] | None = None,
    ) -> bool:
        """Update the document with *doc_id* if it also has every value in *match*."""
        with self.lock:
            records = self.load()
            for raw in records:
                if raw["id"] == doc_id:
                    if any(raw.get(key) != value for key, value in (match or {}).items()):
                        return False
                    raw.update(fields)
                    self.persist(records)
                    return True
        return False

    def remove(self, doc_id: str) -> bool:
        with self.lock:
            records = self.load()
            kept = [raw for raw in records if raw["id"] != doc_id]
            if len(kept) == len(records):
                return False
            self.persist(kept)
        return True

    # --- File helpers ---------------------------------------------------------

    def load(self) -> list[dict[str, Any]]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc

    def persist(self, records: list[dict[str, Any]]) -> None:
        # Write to a sibling file and rename so readers never see half a file.
        tmp_path = self._file_path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(
                json.dumps(records, indent=2, default=_encode) + "\n", encoding="utf-8"
            )
            tmp_path.replace(self._file_path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {self._file_path}: {exc}") from exc


def _encode(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Cannot store {type(value).__name__} in a JSON document")
