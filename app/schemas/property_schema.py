from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from enums.room_type import RoomType
from .base_schema import CamelModel


# Columns that may be omitted from an update but never cleared
NON_NULLABLE_FIELDS = {
    "title",
    "description",
    "price_monthly",
    "location",
    "rooms",
    "bathrooms",
    "furnished",
    "wifi",
    "electricity_backup",
    "water",
    "security",
    "room_type",
    "available_from",
}


class PropertyBase(CamelModel):
    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    price_monthly: float = Field(gt=0)
    price_weekly: Optional[float] = Field(default=None, gt=0)
    location: str = Field(min_length=2)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rooms: int = Field(gt=0)
    bathrooms: int = Field(gt=0)
    furnished: bool = False
    wifi: bool = False
    electricity_backup: bool = False
    water: bool = False
    security: bool = False
    room_type: RoomType
    distance_from_campus: Optional[float] = None
    available_from: datetime


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = Field(default=None, min_length=10)
    price_monthly: Optional[float] = Field(default=None, gt=0)
    price_weekly: Optional[float] = Field(default=None, gt=0)
    location: Optional[str] = Field(default=None, min_length=2)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rooms: Optional[int] = Field(default=None, gt=0)
    bathrooms: Optional[int] = Field(default=None, gt=0)
    furnished: Optional[bool] = None
    wifi: Optional[bool] = None
    electricity_backup: Optional[bool] = None
    water: Optional[bool] = None
    security: Optional[bool] = None
    room_type: Optional[RoomType] = None
    distance_from_campus: Optional[float] = None
    available_from: Optional[datetime] = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in self.model_fields_set:
            if name in NON_NULLABLE_FIELDS and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class PropertyApprovalUpdate(CamelModel):
    approved: bool


class PropertySearchParams(CamelModel):
    """Filters accepted by the public property listing."""

    min_price: Optional[float] = None
    max_price: Optional[float] = None
    location: Optional[str] = None
    wifi: Optional[bool] = None
    furnished: Optional[bool] = None
    room_type: Optional[str] = None
    distance_from_campus: Optional[float] = None
    min_rating: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_means_absent(cls, value):
        # ?minPrice= with no value applies no filter
        if isinstance(value, str) and not value.strip():
            return None
        return value
