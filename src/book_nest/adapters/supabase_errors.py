"""Translation of PostgREST errors into repository errors."""

from collections.abc import Callable
from typing import TypeVar

from postgrest.exceptions import APIError

from book_nest.domain.errors import DuplicateKeyError

_UNIQUE_VIOLATION = "23505"

T = TypeVar("T")


def execute_unique(constraint: str, func: Callable[[], T]) -> T:
    """Run a write, mapping a unique violation onto DuplicateKeyError."""
    try:
        return func()
    except APIError as exc:
        if exc.code == _UNIQUE_VIOLATION:
            raise DuplicateKeyError(constraint) from exc
        raise
