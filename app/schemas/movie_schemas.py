from datetime import date, datetime
from typing import Any, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v: Any) -> Any:
    if v is None:
        return None
    if isinstance(v, str) and not v.strip():
        return None
    return v


def normalize_tags(v: Any) -> List[str]:
    """
    Coerce cast/genres input to an ordered list of unique, trimmed strings.
    A scalar becomes a one-element list; None becomes [].
    """
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        v = [v]
    tags: List[str] = []
    for item in v:
        if item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _check_url(v: Optional[str], label: str) -> Optional[str]:
    v = _blank_to_none(v)
    if v is None:
        return None
    v = str(v).strip()
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"{label} must be a valid URL")
    return v


_URL_LABELS = {
    "image_url": "Image URL",
    "backdrop_url": "Backdrop URL",
    "trailer_url": "Trailer URL",
}


class MovieFields(BaseModel):
    """Shared field rules for create and update payloads."""

    description: Optional[str] = None
    image_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    trailer_url: Optional[str] = None
    duration: Optional[int] = None
    rating: Optional[float] = None
    release_date: Optional[date] = None
    director: Optional[str] = None
    cast: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)

    @field_validator("release_date", "description", "director", mode="before")
    @classmethod
    def blank_is_null(cls, v):
        return _blank_to_none(v)

    @field_validator("duration", mode="before")
    @classmethod
    def duration_is_integer(cls, v):
        v = _blank_to_none(v)
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("Duration must be a positive integer")
        if isinstance(v, float):
            if not v.is_integer():
                raise ValueError("Duration must be a positive integer")
            return int(v)
        text = str(v).strip()
        try:
            return int(text)
        except ValueError:
            pass
        # "120.0" is accepted like the number 120.0
        try:
            number = float(text)
        except ValueError:
            raise ValueError("Duration must be a positive integer")
        if not number.is_integer():
            raise ValueError("Duration must be a positive integer")
        return int(number)

    @field_validator("duration")
    @classmethod
    def duration_is_positive(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Duration must be a positive integer")
        return v

    @field_validator("rating", mode="before")
    @classmethod
    def rating_is_number(cls, v):
        v = _blank_to_none(v)
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("Rating must be a number between 0 and 5")
        try:
            return float(str(v).strip())
        except ValueError:
            raise ValueError("Rating must be a number between 0 and 5")

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v):
        # NaN fails both comparisons
        if v is not None and not (0 <= v <= 5):
            raise ValueError("Rating must be a number between 0 and 5")
        return v

    @field_validator("image_url", "backdrop_url", "trailer_url", mode="before")
    @classmethod
    def url_shaped(cls, v, info):
        return _check_url(v, _URL_LABELS[info.field_name])

    @field_validator("cast", "genres", mode="before")
    @classmethod
    def tags_to_list(cls, v):
        return normalize_tags(v)


class MovieCreate(MovieFields):
    title: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Title is required")
        return str(v).strip()


class MovieUpdate(MovieFields):
    """Partial update; only the fields present in the payload are applied."""

    title: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Title is required")
        return str(v).strip()

    @field_validator("is_active", mode="before")
    @classmethod
    def is_active_strict(cls, v):
        if not isinstance(v, bool):
            raise ValueError("is_active must be true or false")
        return v


class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    trailer_url: Optional[str] = None
    duration: Optional[int] = None
    rating: Optional[float] = None
    release_date: Optional[date] = None
    director: Optional[str] = None
    cast: List[str] = []
    genres: List[str] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("cast", "genres", mode="before")
    @classmethod
    def null_tags(cls, v):
        return v or []


class MovieResponse(BaseModel):
    movie: MovieOut


class MovieListResponse(BaseModel):
    movies: List[MovieOut]


class LatestMovieOut(BaseModel):
    """Card shape for the public latest-movies widget."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    image_url: Optional[str] = None
    rating: Optional[float] = None
    genres: List[str] = []
    duration: Optional[int] = None

    @field_validator("genres", mode="before")
    @classmethod
    def null_genres(cls, v):
        return v or []


class MovieStats(BaseModel):
    total: int
    active: int
    inactive: int
    average_rating: float


class TagIn(BaseModel):
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def value_not_blank(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Value is required")
        return str(v).strip()
