import enum
import uuid

from sqlalchemy import Column, String, Integer, Numeric, Boolean, Date, Time, DateTime, ForeignKey, Enum as SqlEnum, text
from sqlalchemy.orm import relationship

from app.config import DB_SCHEMA
from app.database import Base, table_args, fk, utcnow


class ScreenType(enum.Enum):
    STANDARD = "standard"
    IMAX = "imax"
    THREE_D = "3d"
    VIP = "vip"


class Showtime(Base):
    __tablename__ = "showtimes"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    movie_id = Column(String(36), ForeignKey(fk("movies.id"), ondelete="CASCADE"), nullable=False, index=True)
    theater_id = Column(String(36), ForeignKey(fk("theaters.id"), ondelete="CASCADE"), nullable=False, index=True)
    show_date = Column(Date, nullable=False)
    show_time = Column(Time, nullable=False)
    ticket_price = Column(Numeric(10, 2), nullable=False)
    available_seats = Column(Integer, nullable=False, default=100)
    screen_type = Column(
        SqlEnum(
            ScreenType,
            name="screen_type",
            schema=DB_SCHEMA,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ScreenType.STANDARD,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    theater = relationship("Theater", back_populates="showtimes")
