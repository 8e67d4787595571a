from pydantic import Field
from typing import Optional
from datetime import datetime

from enums.maintenance_status import MaintenanceStatus
from .base_schema import CamelModel
from .auth_schema import UserMinimumResponse
from .property_response import PropertyMinimumResponse


class MaintenanceCreate(CamelModel):
    property_id: int
    description: str = Field(min_length=10)


class MaintenanceUpdate(CamelModel):
    status: MaintenanceStatus


class MaintenanceResponse(CamelModel):
    id: int
    property_id: int
    student_id: int
    description: str
    status: MaintenanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    student: Optional[UserMinimumResponse] = None
    property: Optional[PropertyMinimumResponse] = None
