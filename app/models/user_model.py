from sqlalchemy import Column, String, DateTime

from app.database import Base, table_args, utcnow


class User(Base):
    __tablename__ = "users"
    __table_args__ = table_args()

    # same id as the identity on the auth platform
    id = Column(String(36), primary_key=True, index=True)
    email = Column(String(320), nullable=False, index=True)
    full_name = Column(String, nullable=True)
    phone = Column(String(32), nullable=True)
    role = Column(String(16), nullable=False, default="user", server_default="user")  # user or admin

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
