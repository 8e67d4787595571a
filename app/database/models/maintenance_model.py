from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from utils.time_utils import utc_now

from database.init import Base
from enums.maintenance_status import MaintenanceStatus


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(Enum(MaintenanceStatus), default=MaintenanceStatus.OPEN, nullable=False)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

    student = relationship("User")
    property = relationship("Property", back_populates="maintenance_requests")
