import uuid

from sqlalchemy import Column, String, Integer, Boolean, DateTime, text
from sqlalchemy.orm import relationship

from app.database import Base, table_args, utcnow


class Theater(Base):
    __tablename__ = "theaters"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    address = Column(String)
    distance = Column(String)
    total_seats = Column(Integer, nullable=False, default=100)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    showtimes = relationship("Showtime", back_populates="theater", cascade="all, delete-orphan")
