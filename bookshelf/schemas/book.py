"""Book schemas and request-body validation."""
import re
from typing import Any, Optional

from pydantic import BaseModel, Field

from bookshelf.core.exceptions import ValidationError

UPDATABLE_FIELDS = ("title", "author", "available")

_INT_RE = re.compile(r"\s*[+-]?\d+\s*")


def parse_book_id(raw: str) -> int:
    """
    Parse a path id; anything that is not a whole decimal integer is rejected.

    Unlike a lenient ``parseInt``, trailing characters are not dropped:
    "12abc", "1.5" and "1e3" are invalid ids, not 12, 1 and 1. Ids with
    more digits than ``int()`` accepts are invalid too.
    """
    if not isinstance(raw, str) or not _INT_RE.fullmatch(raw):
        raise ValidationError("Invalid id", field="id")
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError("Invalid id", field="id") from e


def _truthy(value: Any) -> bool:
    # Empty arrays and objects still count as true, as in JSON clients.
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _as_text(value: Any) -> str:
    # JSON spelling for booleans so True is stored as "true".
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_object(payload: Any) -> dict:
    return payload if isinstance(payload, dict) else {}


class BookBase(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    available: bool = False


class BookCreate(BookBase):
    """Fields accepted when adding a book."""

    @classmethod
    def from_payload(cls, payload: Any) -> "BookCreate":
        """
        Build from a raw JSON body.

        ``title`` and ``author`` must be present and truthy and are stored as
        text; ``available`` is kept only when it is a real boolean.
        """
        data = _as_object(payload)
        title, author = data.get("title"), data.get("author")
        if not title or not author:
            raise ValidationError("title and author are required")
        available = data.get("available")
        return cls(
            title=_as_text(title),
            author=_as_text(author),
            available=available if isinstance(available, bool) else False,
        )


class BookUpdate(BaseModel):
    """Partial update; unset fields keep their stored values."""

    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    available: Optional[bool] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "BookUpdate":
        """Build from a raw JSON body containing at least one updatable key."""
        data = _as_object(payload)
        if not any(key in data for key in UPDATABLE_FIELDS):
            raise ValidationError(
                "At least one of title, author, available must be provided"
            )

        fields: dict[str, Any] = {}
        for key in ("title", "author"):
            if key in data:
                value = data[key]
                if value is None or _as_text(value) == "":
                    raise ValidationError(
                        "title and author must not be empty", field=key
                    )
                fields[key] = _as_text(value)
        if "available" in data:
            fields["available"] = _truthy(data["available"])
        return cls(**fields)

    def changes(self) -> dict[str, Any]:
        """Only the fields the client supplied."""
        return self.model_dump(exclude_unset=True)


class BookOut(BookBase):
    id: int
