"""File-backed storage for the book collection."""
import json
import os
import stat
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Callable, List, Optional, Tuple, TypeVar, Union

from bookshelf.core.exceptions import StorageError
from bookshelf.core.logging import get_logger

logger = get_logger("storage")

# Mode a plain open() would give a new file under the current umask.
_UMASK = os.umask(0)
os.umask(_UMASK)
NEW_FILE_MODE = 0o666 & ~_UMASK

T = TypeVar("T")

Collection = List[Any]
Handler = Callable[..., Tuple[T, Optional[Collection]]]


def record_id(record: Any) -> Optional[int]:
    """
    Return the integer id of a stored record, or None if it has none.

    A whole-number float such as 2.0 is the same JSON number as 2 and counts
    as that id. Booleans and other types never do.
    """
    if not isinstance(record, dict):
        return None
    value = record.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value if isinstance(value, int) else None


class BookStore:
    """
    Sole owner of the JSON file backing the book collection.

    Every read parses the whole file and every write replaces it. Mutations
    run through ``mutate`` so that load, change and save of one request never
    interleave with another's.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = Lock()

    def load(self) -> Collection:
        """
        Read the collection from disk.

        A missing file is an empty collection. A file that parses to anything
        other than a JSON array is also treated as empty, while a file that
        does not parse at all raises ``StorageError``.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"{self.path} does not exist yet, starting empty")
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {self.path}: {e}")
            raise StorageError("Failed to read books.", path=str(self.path)) from e

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {self.path}: {e}")
            raise StorageError("Failed to read books.", path=str(self.path)) from e

        return parsed if isinstance(parsed, list) else []

    def save(self, books: Collection) -> None:
        """
        Overwrite the backing file with the full collection.

        The JSON is written to a sibling temp file and moved into place, so a
        concurrent ``load`` sees either the old or the new content.
        """
        payload = json.dumps(books, indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Error writing {self.path}: {e}")
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError("Failed to write books.", path=str(self.path)) from e
        logger.debug(f"Saved {len(books)} book(s) to {self.path}")

    def _file_mode(self) -> int:
        # mkstemp creates 0600 files; keep the mode the backing file already has.
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return NEW_FILE_MODE

    @staticmethod
    def next_id(books: Collection) -> int:
        """Largest integer id in the collection plus one (1 when empty)."""
        return max((i for i in map(record_id, books) if i is not None), default=0) + 1

    def read(self, handler: Handler, *args: Any) -> T:
        """Apply a non-mutating handler to a fresh snapshot of the collection."""
        outcome, _ = handler(self.load(), *args)
        return outcome

    def mutate(self, handler: Handler, *args: Any) -> T:
        """
        Run ``handler(collection, *args)`` under the store lock.

        The handler returns ``(outcome, new_collection)``; the new collection
        is persisted unless it is None. If the handler raises, nothing is
        written and the exception propagates.
        """
        with self._lock:
            outcome, new_books = handler(self.load(), *args)
            if new_books is not None:
                self.save(new_books)
        return outcome
