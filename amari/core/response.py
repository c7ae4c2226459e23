"""JSON envelopes shared by every endpoint.

Success: ``{"data": ...}`` or ``{"data": [...], "meta": {...}}``.
Failure: ``{"error": {"code": ..., "message": ...}}``.
"""


from typing import Generic, TypeVar

from pydantic import BaseModel

from amari.core.pagination import PageMeta, PaginationParams

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T


class ListResponse(BaseModel, Generic[T]):
    data: list[T]
    meta: PageMeta


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody

    @classmethod
    def of(cls, code: str, message: str) -> dict:
        return cls(error=ErrorBody(code=code, message=message)).model_dump()


def paginated(items: list, total: int, pagination: PaginationParams) -> dict:
    """Build the body for a :class:`ListResponse`."""
    return {
        "data": items,
        "meta": PageMeta.build(total, pagination.page, pagination.limit),
    }


def error_responses(*status_codes: int) -> dict[int | str, dict]:
    """OpenAPI ``responses=`` entries documenting the error envelope."""
    return {code: {"model": ErrorResponse} for code in status_codes}
