from pydantic import field_validator
from typing import Optional
from datetime import datetime

from enums.booking_status import BookingStatus
from .base_schema import CamelModel
from .auth_schema import UserMinimumResponse
from .property_response import PropertyMinimumResponse


class BookingCreate(CamelModel):
    property_id: int
    lease_start: datetime
    lease_end: datetime


class BookingStatusUpdate(CamelModel):
    status: BookingStatus

    @field_validator("status")
    @classmethod
    def status_is_decision(cls, value: BookingStatus) -> BookingStatus:
        # A booking can only be decided, never moved back to PENDING
        if value == BookingStatus.PENDING:
            raise ValueError("Status must be APPROVED or REJECTED")
        return value


class BookingLeaseResponse(CamelModel):
    id: int
    document_url: str
    signed_at: Optional[datetime] = None


class BookingResponse(CamelModel):
    id: int
    student_id: int
    property_id: int
    status: BookingStatus
    lease_start: datetime
    lease_end: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    student: Optional[UserMinimumResponse] = None
    property: Optional[PropertyMinimumResponse] = None
    lease: Optional[BookingLeaseResponse] = None
