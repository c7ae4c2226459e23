"""Schema base class and the health payload."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request/response bodies: snake_case in Python, camelCase on the wire.

    ``from_attributes`` lets response models validate ORM rows directly.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"] = "ok"
    app: str
    env: str
    database: Literal["ok", "unavailable"] = "ok"
