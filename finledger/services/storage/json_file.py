"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object file is used as a small key-value
store. The entry snapshot lives under one fixed key, and other keys in the
same file are preserved untouched.

Every save rewrites the file through a temporary sibling and os.replace,
so a reader sees either the old snapshot or the new one, never a partial
write. Transient OSErrors (e.g. a file briefly locked by a sync client)
are retried.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finledger.logger import get_logger
from finledger.models.entry import Entry
from finledger.services.storage.interface import (
    EntryStorageInterface,
    SnapshotReadError,
    StorageWriteError,
    dump_snapshot,
    parse_snapshot,
)

logger = get_logger(__name__)


class JsonFileEntryStorage(EntryStorageInterface):
    """
    JSON-file implementation of the snapshot store.

    File layout:

        {"transactions": "[{\"id\": 1730..., \"type\": \"income\", ...}]"}

    The value is the snapshot text, stored as a string like a browser
    key-value store would hold it.
    """

    def __init__(self, path: Union[str, Path], key: str = "transactions"):
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict:
        """Read the whole key-value document. Missing file is an empty document."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        document = json.loads(text)
        if not isinstance(document, dict):
            raise ValueError("Storage file does not hold a JSON object")
        return document

    def _read_raw(self) -> Optional[str]:
        value = self._read_document().get(self._key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise SnapshotReadError(f"Value under '{self._key}' is not a string")
        return value

    def load(self) -> list[Entry]:
        try:
            raw = self._read_raw()
            if raw is None:
                logger.info("snapshot_missing", path=str(self._path), key=self._key)
                return []
            entries = parse_snapshot(raw)
        except (OSError, ValueError, RecursionError, SnapshotReadError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(
                "snapshot_unreadable",
                path=str(self._path),
                key=self._key,
                error=str(e),
            )
            return []

        logger.info("snapshot_loaded", path=str(self._path), count=len(entries))
        return entries

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
    )
    def _write_document(self, document: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def save(self, entries: Iterable[Entry]) -> None:
        entries = list(entries)

        try:
            document = self._read_document()
        except (OSError, ValueError, RecursionError):
            # Unreadable file: the snapshot key is rewritten from scratch
            document = {}

        document[self._key] = dump_snapshot(entries)

        try:
            self._write_document(document)
        except RetryError as e:
            raise StorageWriteError(
                f"Failed to write {self._path}: {e.last_attempt.exception()}"
            ) from e

        logger.debug("snapshot_saved", path=str(self._path), count=len(entries))
