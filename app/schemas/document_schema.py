from typing import Optional
from datetime import datetime

from .base_schema import CamelModel


class DocumentResponse(CamelModel):
    id: int
    user_id: int
    type: str
    file_url: str
    created_at: Optional[datetime] = None
