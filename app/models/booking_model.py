import enum
import uuid

from sqlalchemy import Column, String, Integer, Numeric, Date, DateTime, ForeignKey, JSON, Enum as SqlEnum
from sqlalchemy.orm import relationship

from app.config import DB_SCHEMA
from app.database import Base, table_args, fk, utcnow


class BookingStatus(enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    booking_reference = Column(String(32), unique=True, nullable=False)
    user_id = Column(String(36), ForeignKey(fk("users.id"), ondelete="SET NULL"), nullable=True, index=True)
    showtime_id = Column(String(36), ForeignKey(fk("showtimes.id"), ondelete="SET NULL"), nullable=True)

    # denormalized so the booking survives showtime/movie edits
    movie_title = Column(String, nullable=False)
    theater_name = Column(String, nullable=False)
    show_date = Column(Date, nullable=False)
    show_time = Column(String(16), nullable=False)
    seats = Column(JSON, nullable=False, default=list)

    ticket_count = Column(Integer, nullable=False)
    ticket_total = Column(Numeric(10, 2), nullable=False)
    snacks_total = Column(Numeric(10, 2), nullable=False, default=0)
    booking_fee = Column(Numeric(10, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    grand_total = Column(Numeric(10, 2), nullable=False)

    customer_email = Column(String(320))
    customer_phone = Column(String(32))
    booking_status = Column(
        SqlEnum(
            BookingStatus,
            name="booking_status",
            schema=DB_SCHEMA,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    snacks = relationship("BookingSnack", back_populates="booking", cascade="all, delete-orphan")


class BookingSnack(Base):
    __tablename__ = "booking_snacks"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    booking_id = Column(String(36), ForeignKey(fk("bookings.id"), ondelete="CASCADE"), nullable=False, index=True)
    snack_id = Column(String(36), ForeignKey(fk("snacks.id"), ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    booking = relationship("Booking", back_populates="snacks")
