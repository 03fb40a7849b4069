"""
Book handlers and the service that runs them against the store.

Handlers are pure: ``(collection, input) -> (outcome, new_collection)``.
They never touch the disk; a ``None`` new collection means nothing to save.
"""
from typing import Any, List, Tuple

from fastapi.concurrency import run_in_threadpool

from bookshelf.core.exceptions import NotFoundError
from bookshelf.core.logging import get_logger
from bookshelf.schemas.book import BookCreate, BookUpdate
from bookshelf.storage import BookStore, Collection, record_id

logger = get_logger("services.books")


def _find_index(books: Collection, book_id: int) -> int:
    for idx, book in enumerate(books):
        if record_id(book) == book_id:
            return idx
    raise NotFoundError("Book", book_id)


def list_books(books: Collection) -> Tuple[Collection, None]:
    return list(books), None


def list_available(books: Collection) -> Tuple[Collection, None]:
    # Only a literal true counts; 1, "true" or a missing key do not.
    return [b for b in books if isinstance(b, dict) and b.get("available") is True], None


def create_book(books: Collection, data: BookCreate) -> Tuple[dict, Collection]:
    new_book = {"id": BookStore.next_id(books), **data.model_dump()}
    return new_book, [*books, new_book]


def update_book(
    books: Collection, book_id: int, data: BookUpdate
) -> Tuple[dict, Collection]:
    idx = _find_index(books, book_id)
    updated = {**books[idx], **data.changes()}
    new_books = list(books)
    new_books[idx] = updated
    return updated, new_books


def delete_book(books: Collection, book_id: int) -> Tuple[None, Collection]:
    idx = _find_index(books, book_id)
    return None, books[:idx] + books[idx + 1:]


class BookService:
    """
    Service for book operations.

    Store calls do blocking file I/O and take a thread lock, so they are
    pushed to the threadpool instead of running on the event loop.
    """

    def __init__(self, store: BookStore):
        self.store = store

    async def list_books(self) -> List[Any]:
        """All books in stored order."""
        return await run_in_threadpool(self.store.read, list_books)

    async def list_available(self) -> List[Any]:
        """Books whose ``available`` flag is true."""
        return await run_in_threadpool(self.store.read, list_available)

    async def create_book(self, data: BookCreate) -> dict:
        """Append a book with the next free id."""
        created = await run_in_threadpool(self.store.mutate, create_book, data)
        logger.info(f"Created book {created['id']}")
        return created

    async def update_book(self, book_id: int, data: BookUpdate) -> dict:
        """Overwrite the supplied fields of an existing book."""
        updated = await run_in_threadpool(self.store.mutate, update_book, book_id, data)
        logger.info(f"Updated book {book_id}")
        return updated

    async def delete_book(self, book_id: int) -> None:
        """Remove a book by id."""
        await run_in_threadpool(self.store.mutate, delete_book, book_id)
        logger.info(f"Deleted book {book_id}")
