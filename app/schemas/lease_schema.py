from pydantic import AnyHttpUrl
from typing import Optional
from datetime import datetime

from .base_schema import CamelModel
from .booking_schema import BookingResponse


class LeaseCreate(CamelModel):
    booking_id: int
    document_url: AnyHttpUrl


class LeaseResponse(CamelModel):
    id: int
    booking_id: int
    document_url: str
    signed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    booking: Optional[BookingResponse] = None
