"""
Pydantic models for hotel records.

``HotelBase`` holds the descriptive fields shared by requests and
responses.  ``HotelCreate`` is the validated shape of a create form,
``HotelUpdate`` the validated shape of a patch (every field optional)
and ``HotelRead`` the stored record returned by the API.  The owner
and the image URLs of a new record are never taken from the client,
so they only appear on ``HotelRead``.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _clean_facilities(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    cleaned: List[str] = []
    for item in value:
        item = item.strip()
        if not item:
            raise ValueError("Facilities must not contain blank entries")
        if item not in cleaned:
            cleaned.append(item)
    return cleaned


class HotelBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Lotus Inn"])
    city: str = Field(..., min_length=1, examples=["Kathmandu"])
    country: str = Field(..., min_length=1, examples=["Nepal"])
    description: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, examples=["Boutique"])
    star_rating: Optional[int] = Field(None, ge=1, le=5)
    price_per_night: float = Field(..., ge=0, allow_inf_nan=False, examples=[100])
    adult_count: int = Field(0, ge=0)
    child_count: int = Field(0, ge=0)
    facilities: List[str] = Field(..., min_length=1, examples=[["wifi", "parking"]])

    model_config = {
        "str_strip_whitespace": True,
    }

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, v):
        return _clean_facilities(v)


class HotelCreate(HotelBase):
    """Schema for creating a hotel."""
    pass


class HotelUpdate(BaseModel):
    """Schema for updating a hotel.

    All fields are optional; only provided fields are changed.
    ``image_urls`` lists the already hosted images the owner keeps;
    any image not listed is dropped from the record.
    """

    name: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    star_rating: Optional[int] = Field(None, ge=1, le=5)
    price_per_night: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    adult_count: Optional[int] = Field(None, ge=0)
    child_count: Optional[int] = Field(None, ge=0)
    facilities: Optional[List[str]] = Field(None, min_length=1)
    image_urls: Optional[List[str]] = None

    model_config = {
        "str_strip_whitespace": True,
    }

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, v):
        return _clean_facilities(v)


class HotelRead(HotelBase):
    """Schema for reading a hotel from the API."""

    id: str
    owner_id: str
    image_urls: List[str] = Field(default_factory=list)
    last_updated: datetime

    model_config = {
        "from_attributes": True,
    }


class FieldError(BaseModel):
    """One rejected input field."""

    field: str
    message: str


class DeleteAck(BaseModel):
    message: str = Field(..., examples=["Hotel deleted successfully"])
