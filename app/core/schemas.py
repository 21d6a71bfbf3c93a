from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class APIModel(BaseModel):
    """Snake case in Python, camel case on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    total: int
    hasMore: bool


class Envelope(BaseModel, Generic[T]):
    """Success envelope returned by every endpoint"""
    success: bool = True
    data: T
    pagination: Optional[Pagination] = None
    invalidate: Optional[List[List[Any]]] = None
    message: Optional[str] = None
