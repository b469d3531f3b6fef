"""Read and write the todo database file.

RecordStore is the public API:
    store = RecordStore("/home/me/.todo/database")
    store.initialize(confirm=lambda: True)
    store.append("buy milk")
    for record in store.list_records():
        print(record.format())
    store.delete_at(1)

File layout: plain text, one record per line. Bytes that do not decode in the
platform encoding are kept as-is. Blank lines are tolerated
(older versions wrote a leading one on every append) but never count
toward a record's index.

Rewrites (delete_at) go through a tmp file in the same directory followed
by an atomic rename. No locking: one invocation at a time is assumed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from todo.models import Record

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger("todo.store")

# Undecodable bytes round-trip unchanged through read and rewrite
_ERRORS = "surrogateescape"


class NotInitializedError(Exception):
    """Raised when an operation runs against a missing database file."""

    def __init__(self, path: Path) -> None:
        super().__init__("Database not initialized!")
        self.path = path


class RecordStore:
    """Line-indexed record store backed by a single text file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.path.exists()

    def initialize(self, confirm: Callable[[], bool]) -> str | None:
        """Create the database file, or truncate it if ``confirm()`` agrees.

        Returns "initialized" for a fresh file, "re-initialized" after a
        confirmed truncate, or None when the caller declined.
        """
        existed = self.exists()
        if existed and not confirm():
            logger.info("re-initialization declined: %s", self.path)
            return None

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        logger.info("database %s: %s", "truncated" if existed else "created", self.path)
        return "re-initialized" if existed else "initialized"

    def wipe(self) -> None:
        """Delete the database file. The store becomes uninitialized."""
        self._require_initialized()
        self.path.unlink()
        logger.info("database removed: %s", self.path)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_records(self) -> Iterator[Record]:
        """Iterate records in file order, numbered from 1."""
        self._require_initialized()
        return self._iter_records()

    def search(self, pattern: str) -> Iterator[Record]:
        """Iterate records whose text contains ``pattern`` (literal, case-sensitive).

        Indexes are positions among all records, not among matches.
        """
        self._require_initialized()
        return (r for r in self._iter_records() if pattern in r.text)

    def _iter_records(self) -> Iterator[Record]:
        index = 0
        with self.path.open(errors=_ERRORS) as f:
            for line in f:
                text = line.rstrip("\n")
                if not text:
                    continue
                index += 1
                yield Record(index=index, text=text)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def append(self, text: str) -> None:
        """Append ``text`` as the last record.

        ``text`` is written verbatim; an embedded newline splits it into
        several records on the next read.
        """
        self._require_initialized()
        separator = "\n" if self._missing_final_newline() else ""
        with self.path.open("a", errors=_ERRORS) as f:
            f.write(f"{separator}{text}\n")
        logger.debug("appended record: %r", text)

    def delete_at(self, index: int) -> Record | None:
        """Remove the record at 1-based ``index`` and rewrite the file.

        Out-of-range indexes leave the file untouched and return None.
        """
        self._require_initialized()
        texts = [r.text for r in self._iter_records()]
        if not 1 <= index <= len(texts):
            logger.debug("delete_at(%d): out of range (%d records)", index, len(texts))
            return None

        removed = Record(index=index, text=texts.pop(index - 1))
        self._rewrite(texts)
        logger.info("deleted record %d: %r", index, removed.text)
        return removed

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _require_initialized(self) -> None:
        if not self.exists():
            raise NotInitializedError(self.path)

    def _missing_final_newline(self) -> bool:
        """True when the file is non-empty and its last byte is not a newline."""
        if self.path.stat().st_size == 0:
            return False
        with self.path.open("rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"

    def _rewrite(self, texts: list[str]) -> None:
        """Write ``texts`` to a tmp file, then rename it over the database."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with tmp.open("w", errors=_ERRORS) as f:
                f.writelines(f"{text}\n" for text in texts)
            tmp.replace(self.path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
