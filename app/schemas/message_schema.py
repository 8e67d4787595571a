from pydantic import Field
from typing import Optional
from datetime import datetime

from .base_schema import CamelModel
from .auth_schema import UserNameResponse


class MessageCreate(CamelModel):
    receiver_id: int
    property_id: Optional[int] = None
    content: str = Field(min_length=1)


class MessageResponse(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    property_id: Optional[int] = None
    content: str
    created_at: Optional[datetime] = None
    sender: Optional[UserNameResponse] = None
    receiver: Optional[UserNameResponse] = None
