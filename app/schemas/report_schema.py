from typing import List

from enums.booking_status import BookingStatus
from enums.role import Role
from .base_schema import CamelModel


class AnalyticsOverview(CamelModel):
    total_users: int
    total_properties: int
    total_bookings: int
    recent_bookings: int
    total_revenue: float


class StatusCount(CamelModel):
    status: BookingStatus
    count: int


class RoleCount(CamelModel):
    role: Role
    count: int


class TopPropertyResponse(CamelModel):
    id: int
    title: str
    location: str
    price_monthly: float
    booking_count: int = 0
    review_count: int = 0
    avg_rating: float = 0


class AnalyticsResponse(CamelModel):
    overview: AnalyticsOverview
    bookings_by_status: List[StatusCount]
    users_by_role: List[RoleCount]
    top_properties_by_bookings: List[TopPropertyResponse]
    top_properties_by_rating: List[TopPropertyResponse]
