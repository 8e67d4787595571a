from typing import List, Optional
from datetime import datetime

from enums.room_type import RoomType
from .base_schema import CamelModel
from .auth_schema import UserMinimumResponse, UserNameResponse


class PropertyMinimumResponse(CamelModel):
    id: int
    title: str
    location: str
    price_monthly: Optional[float] = None


class PropertyResponse(CamelModel):
    id: int
    title: str
    description: str
    price_monthly: float
    price_weekly: Optional[float] = None
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rooms: int
    bathrooms: int
    furnished: bool
    wifi: bool
    electricity_backup: bool
    water: bool
    security: bool
    room_type: RoomType
    distance_from_campus: Optional[float] = None
    available_from: datetime
    approved: bool
    landlord_id: int
    landlord: Optional[UserMinimumResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PropertyListItemResponse(PropertyResponse):
    avg_rating: float = 0
    review_count: int = 0


class PropertyReviewResponse(CamelModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    student: Optional[UserNameResponse] = None


class PropertyDetailResponse(PropertyListItemResponse):
    reviews: List[PropertyReviewResponse] = []
