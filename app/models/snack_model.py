import enum
import uuid

from sqlalchemy import Column, String, Text, Numeric, Boolean, DateTime, Enum as SqlEnum, text

from app.config import DB_SCHEMA
from app.database import Base, table_args, utcnow


class SnackCategory(enum.Enum):
    SNACK = "snack"
    DRINK = "drink"
    COMBO = "combo"


class Snack(Base):
    __tablename__ = "snacks"
    __table_args__ = table_args()

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    image_emoji = Column(String(16))
    category = Column(
        SqlEnum(
            SnackCategory,
            name="snack_category",
            schema=DB_SCHEMA,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=SnackCategory.SNACK,
    )
    is_available = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
