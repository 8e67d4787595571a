from pydantic import Field
from typing import Optional
from datetime import datetime

from .base_schema import CamelModel
from .auth_schema import UserNameResponse
from .property_response import PropertyMinimumResponse


class ReviewCreate(CamelModel):
    property_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    id: int
    student_id: int
    property_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    student: Optional[UserNameResponse] = None
    property: Optional[PropertyMinimumResponse] = None
