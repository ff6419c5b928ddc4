from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import DATABASE_URL, DB_SCHEMA, SQL_ECHO
from typing import AsyncGenerator
from datetime import datetime, timezone

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set in environment variables")

engine = create_async_engine(
    DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://"),
    echo=SQL_ECHO,
    future=True
)

AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


def table_args(*args):
    """__table_args__ carrying the configured schema (if any)."""
    if DB_SCHEMA:
        return (*args, {"schema": DB_SCHEMA})
    return args


def fk(target: str) -> str:
    """Foreign key target qualified with the configured schema."""
    return f"{DB_SCHEMA}.{target}" if DB_SCHEMA else target


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Dependency for FastAPI routes
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
