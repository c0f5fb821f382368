from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class NewUser(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str


class NewProperty(BaseModel):
    """Listing submitted by an owner. ``cost_per_night`` is in dollars."""

    owner_id: int = Field(..., ge=0)
    title: str = Field(..., min_length=1)
    description: str = ""
    thumbnail_photo_url: str = ""
    cover_photo_url: str = ""
    cost_per_night: Decimal = Field(..., ge=0)
    street: str = ""
    city: str = ""
    province: str = ""
    post_code: str = ""
    country: str = ""
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
