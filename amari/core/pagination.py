"""Pagination helpers for list endpoints."""


import math
from typing import Literal

from fastapi import Query
from pydantic import BaseModel
from pydantic.alias_generators import to_snake


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20&sort=submittedAt&order=desc`.

    ``sort`` takes the camelCase field names the API returns.
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=20, ge=1, le=200, description="Items per page"),
        sort: str | None = Query(default=None, description="Sort field, e.g. submittedAt"),
        order: Literal["asc", "desc"] = Query(default="desc", description="Sort order"),
    ):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def sort_column(self, default: str) -> str:
        """Column name to order by; *default* when the caller sent no sort."""
        return to_snake(self.sort) if self.sort else default


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit) if limit else 1)
