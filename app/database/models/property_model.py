from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from utils.time_utils import utc_now
from database.init import Base
from enums.room_type import RoomType


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), index=True, nullable=False)
    description = Column(Text, nullable=False)
    price_monthly = Column(Float, nullable=False)
    price_weekly = Column(Float, nullable=True)
    location = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    rooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    furnished = Column(Boolean, default=False, nullable=False)
    wifi = Column(Boolean, default=False, nullable=False)
    electricity_backup = Column(Boolean, default=False, nullable=False)
    water = Column(Boolean, default=False, nullable=False)
    security = Column(Boolean, default=False, nullable=False)
    room_type = Column(Enum(RoomType), nullable=False)
    distance_from_campus = Column(Float, nullable=True)
    available_from = Column(DateTime, nullable=False)
    approved = Column(Boolean, default=False, nullable=False, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

    landlord = relationship("User", back_populates="properties")
    bookings = relationship("Booking", back_populates="property", cascade="all, delete-orphan")
    reviews = relationship(
        "Review",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Review.created_at.desc()",
    )
    maintenance_requests = relationship(
        "MaintenanceRequest", back_populates="property", cascade="all, delete-orphan"
    )
