import uuid

from sqlalchemy import Column, String, Text, Integer, Float, Boolean, Date, DateTime, JSON, text

from app.database import Base, table_args, utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class Movie(Base):
    __tablename__ = "movies"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=_new_id)
    title = Column(String, nullable=False)
    description = Column(Text)
    image_url = Column(String(2048))
    backdrop_url = Column(String(2048))
    trailer_url = Column(String(2048))
    duration = Column(Integer)  # minutes
    rating = Column(Float)      # 0..5
    release_date = Column(Date)
    director = Column(String)
    cast = Column(JSON, nullable=False, default=list)
    genres = Column(JSON, nullable=False, default=list)

    # soft-delete flag; inactive movies are hidden from public listings
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
