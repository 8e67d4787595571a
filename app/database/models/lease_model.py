from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from utils.time_utils import utc_now

from database.init import Base


class Lease(Base):
    __tablename__ = "leases"

    id = Column(Integer, primary_key=True, index=True)
    # unique: one lease per booking
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    document_url = Column(String(500), nullable=False)
    signed_at = Column(DateTime, default=utc_now)
    created_at = Column(DateTime, default=utc_now)

    booking = relationship("Booking", back_populates="lease")
