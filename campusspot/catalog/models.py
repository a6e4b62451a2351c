from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PlaceType(str, Enum):
    library = "Library"
    cafe = "Cafe"
    outdoor = "Outdoor"
    lounge = "Lounge"
    classroom = "Classroom"


class NoiseLevel(str, Enum):
    silent = "Silent"
    quiet = "Quiet"
    moderate = "Moderate"
    lively = "Lively"


class Tab(str, Enum):
    discover = "discover"
    saved = "saved"
    profile = "profile"


# Stored records use the camelCase field names of the persisted JSON;
# Python code uses the snake_case attribute names.
_RECORD_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


class Review(BaseModel):
    model_config = _RECORD_CONFIG

    id: str
    place_id: str
    user_name: str
    rating: int = Field(..., ge=1, le=5)
    text: str
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds")


class Place(BaseModel):
    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str
    type: PlaceType
    description: str = ""
    image: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    noise_level: NoiseLevel
    has_outlets: bool = False
    has_wifi: bool = False
    has_food: bool = False
    is_open_late: bool = False
    is_crowded: bool = False
    reviews: tuple[Review, ...] = ()


class NewPlace(BaseModel):
    """User input for a place submitted from the add-place form."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str = Field(..., min_length=1, max_length=200)
    type: PlaceType = PlaceType.library
    description: str = ""
    noise_level: NoiseLevel = NoiseLevel.quiet
    has_outlets: bool = False
    has_wifi: bool = True
    has_food: bool = False
    is_open_late: bool = False
    image: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class FilterState(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    outlets: bool = False
    open_late: bool = False
    noise: frozenset[NoiseLevel] = frozenset()


class CatalogState(BaseModel):
    """Snapshot of everything the user can change. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    places: tuple[Place, ...] = ()
    favorites: frozenset[str] = frozenset()
    visited: frozenset[str] = frozenset()
    custom_ids: frozenset[str] = frozenset()


class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    text: str = Field(..., min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("review text must not be blank")
        return value


class ToggleResponse(BaseModel):
    id: str
    active: bool


class ProfileResponse(BaseModel):
    places_visited: int
    favorites: int
    reviews_written: int
    custom_places: int
