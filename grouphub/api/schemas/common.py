"""Common schemas for the GroupHub API."""

from typing import Generic, TypeVar, List, Dict, Union
from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated list wrapper."""
    data: List[T]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def create(cls, data: List[T], total: int, page: int, per_page: int):
        pages = (total + per_page - 1) // per_page if per_page > 0 else 0
        return cls(data=data, total=total, page=page, per_page=per_page, pages=pages)


class DataResponse(BaseModel, Generic[T]):
    """Single record wrapper."""
    data: T


class ErrorResponse(BaseModel):
    """Error body: a message, or field -> messages for validation errors."""
    errors: Union[str, Dict[str, List[str]]]


# OpenAPI documentation for the error bodies shared by resource routers
ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Unauthenticated"},
    403: {"model": ErrorResponse, "description": "This action is unauthorized."},
    404: {"model": ErrorResponse, "description": "Not found"},
    422: {"model": ErrorResponse, "description": "Validation failed"},
}
