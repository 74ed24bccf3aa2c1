"""Schemas shared across catalog routes."""
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ListPage(BaseModel, Generic[T]):
    """Rows plus total count of a list query."""
    data: List[T] = []
    count: int = 0


class DeletedResponse(BaseModel, Generic[T]):
    """Soft-deleted row and a confirmation message."""
    data: T
    message: str
