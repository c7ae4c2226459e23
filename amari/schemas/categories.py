"""Vendor categories and the category-specific details union.

Each category with questionnaire fields of its own gets a typed variant; the
rest share :class:`GenericDetails`. The variant is picked by the ``category``
key, which the application schema copies in from ``vendorCategory`` before
validation.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter

from amari.schemas.common import CamelModel


class VendorCategory(str, enum.Enum):
    VENUES = "Venues"
    WEDDING_PLANNERS = "Wedding Planners"
    PHOTOGRAPHY = "Photography"
    VIDEOGRAPHY = "Videography"
    CATERING = "Catering"
    CAKES_DESSERTS = "Cakes & Desserts"
    FLORALS = "Florals"
    DECOR_STYLING = "Decor & Styling"
    HAIR_MAKEUP = "Hair & Makeup"
    BRIDAL_WEAR = "Bridal Wear"
    GROOM_WEAR = "Groom Wear"
    MUSIC_DJS = "Music & DJs"
    LIVE_ENTERTAINMENT = "Live Entertainment"
    OFFICIANTS = "Officiants"
    TRANSPORT = "Transport"
    ACCOMMODATION = "Accommodation"
    BOAT_DHOW_CRUISES = "Boat & Dhow Cruises"
    LIGHTING_SOUND = "Lighting & Sound"
    RENTALS = "Rentals"
    STATIONERY = "Stationery"
    ACTIVITIES_EXCURSIONS = "Activities & Excursions"


class PricingModel(str, enum.Enum):
    FLAT = "flat"
    PER_PERSON = "per_person"
    PER_HOUR = "per_hour"
    PACKAGE = "package"
    CUSTOM = "custom"


# ---------------------------------------------------------------------------
# Typed variants
# ---------------------------------------------------------------------------

class _TypedDetails(CamelModel):
    """Named questionnaire fields are validated; any other answers are kept as sent."""

    model_config = {**CamelModel.model_config, "extra": "allow"}


class VenueDetails(_TypedDetails):
    category: Literal["Venues"] = "Venues"
    venue_type: str | None = None
    guest_capacity: int | None = Field(default=None, ge=0)
    accommodation_rooms: int | None = Field(default=None, ge=0)
    exclusive_use: bool | None = None
    catering_policy: str | None = None


class CateringDetails(_TypedDetails):
    category: Literal["Catering"] = "Catering"
    cuisine_types: list[str] = Field(default_factory=list)
    menu_summary: str | None = None
    max_guests: int | None = Field(default=None, ge=0)
    dietary_options: list[str] = Field(default_factory=list)
    tasting_available: bool | None = None


class PhotographyDetails(_TypedDetails):
    category: Literal["Photography"] = "Photography"
    photography_style: str | None = None
    coverage_hours: str | None = None
    delivery_timeline: str | None = None
    second_shooter: bool | None = None
    drone_available: bool | None = None


class VideographyDetails(_TypedDetails):
    category: Literal["Videography"] = "Videography"
    film_style: str | None = None
    coverage_hours: str | None = None
    highlight_length: str | None = None
    delivery_timeline: str | None = None
    drone_available: bool | None = None


class HairMakeupDetails(_TypedDetails):
    category: Literal["Hair & Makeup"] = "Hair & Makeup"
    team_size: int | None = Field(default=None, ge=0)
    trial_included: bool | None = None
    products_used: str | None = None
    travels_to_venue: bool | None = None


class MusicDetails(_TypedDetails):
    category: Literal["Music & DJs"] = "Music & DJs"
    genres: list[str] = Field(default_factory=list)
    equipment_provided: bool | None = None
    set_length: str | None = None
    mc_services: bool | None = None


class TransportDetails(_TypedDetails):
    category: Literal["Transport"] = "Transport"
    vehicle_types: list[str] = Field(default_factory=list)
    fleet_size: int | None = Field(default=None, ge=0)
    max_passengers: int | None = Field(default=None, ge=0)
    airport_transfers: bool | None = None


class BoatCruiseDetails(_TypedDetails):
    category: Literal["Boat & Dhow Cruises"] = "Boat & Dhow Cruises"
    vessel_type: str | None = None
    max_passengers: int | None = Field(default=None, ge=0)
    sunset_cruises: bool | None = None
    onboard_catering: bool | None = None


class GenericDetails(CamelModel):
    """Free key/value answers for categories without a dedicated questionnaire."""

    category: str | None = None
    answers: dict[str, Any] = Field(default_factory=dict)


_TYPED_VARIANTS: dict[str, type[CamelModel]] = {
    "Venues": VenueDetails,
    "Catering": CateringDetails,
    "Photography": PhotographyDetails,
    "Videography": VideographyDetails,
    "Hair & Makeup": HairMakeupDetails,
    "Music & DJs": MusicDetails,
    "Transport": TransportDetails,
    "Boat & Dhow Cruises": BoatCruiseDetails,
}


def _details_tag(value: Any) -> str:
    if isinstance(value, dict):
        category = value.get("category")
    else:
        category = getattr(value, "category", None)
    return category if category in _TYPED_VARIANTS else "generic"


CategoryDetails = Annotated[
    Union[
        Annotated[VenueDetails, Tag("Venues")],
        Annotated[CateringDetails, Tag("Catering")],
        Annotated[PhotographyDetails, Tag("Photography")],
        Annotated[VideographyDetails, Tag("Videography")],
        Annotated[HairMakeupDetails, Tag("Hair & Makeup")],
        Annotated[MusicDetails, Tag("Music & DJs")],
        Annotated[TransportDetails, Tag("Transport")],
        Annotated[BoatCruiseDetails, Tag("Boat & Dhow Cruises")],
        Annotated[GenericDetails, Tag("generic")],
    ],
    Discriminator(_details_tag),
]


def tag_category_details(bag: Any, category: Any) -> Any:
    """Prepare a raw details bag for validation against *category*'s variant.

    Typed variants take the bag's keys as fields. Everything else is wrapped
    as ``{"category": ..., "answers": bag}``. A bag already in the wrapped
    shape is unwrapped first, so answers survive a move between a generic
    and a typed category.
    """
    if not isinstance(bag, dict):
        return bag
    if isinstance(category, enum.Enum):
        category = category.value
    if set(bag) <= {"category", "answers"} and isinstance(bag.get("answers"), dict):
        answers = bag["answers"]
    else:
        answers = {k: v for k, v in bag.items() if k != "category"}
    if category in _TYPED_VARIANTS:
        return {**answers, "category": category}
    return {"category": category, "answers": answers}


_details_adapter: TypeAdapter[Any] = TypeAdapter(CategoryDetails)


def parse_category_details(bag: Any, category: Any) -> CamelModel:
    """Validate *bag* against the variant for *category*.

    Raises :class:`pydantic.ValidationError` when a typed field has the wrong type.
    """
    return _details_adapter.validate_python(tag_category_details(bag, category))
