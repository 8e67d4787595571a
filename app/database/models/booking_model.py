from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from utils.time_utils import utc_now

from database.init import Base
from enums.booking_status import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

    lease_start = Column(DateTime, nullable=False)
    lease_end = Column(DateTime, nullable=False)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

    student = relationship("User", back_populates="bookings")
    property = relationship("Property", back_populates="bookings")
    lease = relationship("Lease", back_populates="booking", uselist=False, cascade="all, delete-orphan")
