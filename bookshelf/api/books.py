"""Book API routes."""
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Response, status

from bookshelf.core.exceptions import StorageError
from bookshelf.dependencies import get_book_service
from bookshelf.schemas.book import BookCreate, BookOut, BookUpdate, parse_book_id
from bookshelf.schemas.common import ErrorResponse
from bookshelf.services.books import BookService

router = APIRouter(prefix="/books", tags=["Books"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid input."},
    404: {"model": ErrorResponse, "description": "Book not found."},
    500: {"model": ErrorResponse, "description": "Storage failure."},
}


@router.get("", response_model=List[Any], responses={500: _ERRORS[500]})
async def list_books(service: BookService = Depends(get_book_service)) -> List[Any]:
    """List all books in stored order."""
    try:
        return await service.list_books()
    except StorageError as e:
        raise StorageError("Failed to read books.") from e


@router.get("/available", response_model=List[Any], responses={500: _ERRORS[500]})
async def list_available_books(
    service: BookService = Depends(get_book_service),
) -> List[Any]:
    """List books whose ``available`` flag is true."""
    try:
        return await service.list_available()
    except StorageError as e:
        raise StorageError("Failed to read books.") from e


@router.post(
    "",
    response_model=BookOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
)
async def create_book(
    payload: Any = Body(None),
    service: BookService = Depends(get_book_service),
) -> dict:
    """Add a book; the id is assigned by the store."""
    data = BookCreate.from_payload(payload)
    try:
        return await service.create_book(data)
    except StorageError as e:
        raise StorageError("Failed to add book.") from e


@router.put(
    "/{book_id}",
    responses={200: {"model": BookOut}, **_ERRORS},
)
async def update_book(
    book_id: str,
    payload: Any = Body(None),
    service: BookService = Depends(get_book_service),
) -> dict:
    """Update the supplied fields of a book."""
    parsed_id = parse_book_id(book_id)
    data = BookUpdate.from_payload(payload)
    try:
        return await service.update_book(parsed_id, data)
    except StorageError as e:
        raise StorageError("Failed to update book.") from e


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
)
async def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book by id."""
    parsed_id = parse_book_id(book_id)
    try:
        await service.delete_book(parsed_id)
    except StorageError as e:
        raise StorageError("Failed to delete book.") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
