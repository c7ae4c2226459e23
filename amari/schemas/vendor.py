"""Public vendor directory response model.

Built from :class:`amari.domain.vendor.Vendor` rows, which carry no
verification or admin fields, so nothing private can leak through here.
"""


from datetime import datetime
from typing import Any

from pydantic import field_validator

from amari.core.config import settings
from amari.schemas.common import CamelModel

class VendorOut(CamelModel):
    id: str
    name: str
    category: str | None = None
    rating: float = 0.0
    price_range: str = ""
    description: str = ""
    image_url: str = ""
    location: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    website: str | None = None
    social_links: dict[str, str] | str | None = None
    story: str | None = None
    other_services: str | None = None
    approved_at: datetime | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_as_float(cls, v: Any) -> float:
        return float(v) if v is not None else 0.0

    @field_validator("price_range", mode="before")
    @classmethod
    def _default_price_range(cls, v: Any) -> str:
        return v or settings.default_price_range

    @field_validator("image_url", mode="before")
    @classmethod
    def _default_image(cls, v: Any) -> str:
        return v or settings.vendor_placeholder_image

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, v: Any) -> str:
        return v or ""
