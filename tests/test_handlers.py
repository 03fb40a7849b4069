"""Pure handler and input-validation tests."""
import pytest

from bookshelf.core.exceptions import NotFoundError, ValidationError
from bookshelf.schemas.book import BookCreate, BookUpdate, parse_book_id
from bookshelf.services import books as handlers


def make_books():
    return [
        {"id": 1, "title": "A", "author": "X", "available": True},
        {"id": 2, "title": "B", "author": "Y", "available": False},
        {"id": 3, "title": "C", "author": "Z", "available": True},
    ]


def test_create_assigns_sequential_ids():
    books = []
    for expected in range(1, 6):
        created, books = handlers.create_book(books, BookCreate(title="T", author="A"))
        assert created["id"] == expected
    assert [b["id"] for b in books] == [1, 2, 3, 4, 5]


def test_create_does_not_mutate_input():
    books = make_books()
    _, new_books = handlers.create_book(books, BookCreate(title="D", author="W"))
    assert len(books) == 3
    assert len(new_books) == 4
    assert new_books[-1] == {"id": 4, "title": "D", "author": "W", "available": False}


def test_deleting_max_id_reuses_it():
    books = make_books()
    _, books = handlers.delete_book(books, 3)
    created, _ = handlers.create_book(books, BookCreate(title="N", author="M"))
    assert created["id"] == 3


def test_deleting_lower_id_does_not_reuse_it():
    _, books = handlers.delete_book(make_books(), 1)
    created, _ = handlers.create_book(books, BookCreate(title="N", author="M"))
    assert created["id"] == 4


def test_list_available_only_literal_true():
    books = [
        {"id": 1, "available": True},
        {"id": 2, "available": "true"},
        {"id": 3},
        {"id": 4, "available": 1},
        "garbage",
        {"id": 5, "available": False},
    ]
    available, new_books = handlers.list_available(books)
    assert available == [{"id": 1, "available": True}]
    assert new_books is None


def test_list_books_returns_everything_in_order():
    books = make_books()
    listed, new_books = handlers.list_books(books)
    assert listed == books
    assert new_books is None


def test_update_only_touches_supplied_fields():
    books = make_books()
    updated, new_books = handlers.update_book(books, 2, BookUpdate(available=True))
    assert updated == {"id": 2, "title": "B", "author": "Y", "available": True}
    assert new_books[1] == updated
    assert books[1]["available"] is False


def test_update_unknown_id():
    with pytest.raises(NotFoundError) as exc_info:
        handlers.update_book(make_books(), 99, BookUpdate(title="Q"))
    assert exc_info.value.message == "Book not found"


def test_delete_unknown_id():
    with pytest.raises(NotFoundError):
        handlers.delete_book(make_books(), 99)


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), ("-3", -3)])
def test_parse_book_id(raw, expected):
    assert parse_book_id(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", "1.5", "1e3", "12abc", "0x1f"])
def test_parse_book_id_rejects(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_book_id(raw)
    assert exc_info.value.message == "Invalid id"


def test_parse_book_id_rejects_ids_too_long_for_int():
    with pytest.raises(ValidationError) as exc_info:
        parse_book_id("9" * 5000)
    assert exc_info.value.message == "Invalid id"


@pytest.mark.parametrize(
    "payload",
    [None, [], {}, {"title": "A"}, {"author": "B"}, {"title": "", "author": "B"},
     {"title": "A", "author": None}, {"title": 0, "author": "B"}],
)
def test_create_requires_title_and_author(payload):
    with pytest.raises(ValidationError) as exc_info:
        BookCreate.from_payload(payload)
    assert exc_info.value.message == "title and author are required"


def test_create_coerces_fields():
    data = BookCreate.from_payload({"title": 1984, "author": "Orwell", "available": "yes"})
    assert data.title == "1984"
    assert data.available is False
    assert BookCreate.from_payload({"title": "A", "author": "B", "available": True}).available


def test_update_requires_a_known_field():
    with pytest.raises(ValidationError):
        BookUpdate.from_payload({"isbn": "123"})


def test_update_coerces_fields():
    data = BookUpdate.from_payload({"title": 5, "available": 1, "extra": "ignored"})
    assert data.changes() == {"title": "5", "available": True}


@pytest.mark.parametrize("value, expected", [([], True), ({}, True), ("false", True), (0, False), ("", False), (None, False)])
def test_update_available_truthiness(value, expected):
    assert BookUpdate.from_payload({"available": value}).available is expected


def test_update_matches_whole_number_float_id():
    books = [{"id": 2.0, "title": "A", "author": "X", "available": False}]
    updated, _ = handlers.update_book(books, 2, BookUpdate(title="B"))
    assert updated["title"] == "B"


def test_update_rejects_empty_text():
    with pytest.raises(ValidationError):
        BookUpdate.from_payload({"author": ""})
    with pytest.raises(ValidationError):
        BookUpdate.from_payload({"title": None})
