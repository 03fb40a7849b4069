"""
FastAPI dependencies for the book store and service.
"""
from functools import lru_cache

from fastapi import Depends

from bookshelf.config import get_settings
from bookshelf.services.books import BookService
from bookshelf.storage import BookStore


@lru_cache
def get_book_store() -> BookStore:
    """
    Dependency provider for the process-wide BookStore.

    One instance per process so every request shares the same lock.
    """
    return BookStore(get_settings().data_file)


def get_book_service(store: BookStore = Depends(get_book_store)) -> BookService:
    """
    Dependency provider for BookService.
    """
    return BookService(store)
