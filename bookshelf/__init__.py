"""Bookshelf: a CRUD API over a single JSON file of books."""

__version__ = "1.0.0"
