"""Business logic services."""
from bookshelf.services.books import BookService

__all__ = ["BookService"]
