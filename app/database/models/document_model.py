from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from utils.time_utils import utc_now

from database.init import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    file_url = Column(String(500), nullable=False)
    created_at = Column(DateTime, default=utc_now)

    user = relationship("User", back_populates="documents")
