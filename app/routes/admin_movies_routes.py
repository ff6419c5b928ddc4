# app/routes/admin_movies_routes.py
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.deps.admin import require_admin
from app.models.movie_model import Movie
from app.schemas.movie_schemas import (
    MovieCreate, MovieUpdate, MovieResponse, MovieListResponse, MovieStats, TagIn,
)

router = APIRouter(
    prefix="/api/admin/movies",
    tags=["admin-movies"],
    dependencies=[Depends(require_admin)],
)


class TagField(str, Enum):
    CAST = "cast"
    GENRES = "genres"


async def _get_movie_or_404(db: AsyncSession, movie_id: str) -> Movie:
    movie = await db.get(Movie, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


async def _save(db: AsyncSession, movie: Movie, action: str) -> Movie:
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        print(f"[movies] {action} failed for {movie.id}: {e!r}")
        raise HTTPException(status_code=500, detail=f"Failed to {action} movie")
    await db.refresh(movie)
    return movie


def summarize(movies) -> MovieStats:
    """Dashboard counters; a missing rating counts as 0 in the average (ties round up)."""
    total = len(movies)
    active = sum(1 for m in movies if m.is_active)
    average = sum((m.rating or 0) for m in movies) / total if total else 0.0
    return MovieStats(
        total=total,
        active=active,
        inactive=total - active,
        average_rating=float(
            Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        ),
    )


@router.get("", response_model=MovieListResponse)
async def list_movies(
    active_only: bool = Query(False),
    db: AsyncSession = Depends(get_async_session),
):
    stmt = select(Movie)
    if active_only:
        stmt = stmt.where(Movie.is_active.is_(True))
    stmt = stmt.order_by(desc(Movie.created_at))
    rows = (await db.execute(stmt)).scalars().all()
    return {"movies": rows}


@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(payload: MovieCreate, db: AsyncSession = Depends(get_async_session)):
    movie = Movie(**payload.model_dump(), is_active=True)
    db.add(movie)
    movie = await _save(db, movie, "create")
    print(f"[movies] Created {movie.id} ({movie.title!r})")
    return {"movie": movie}


@router.get("/stats", response_model=MovieStats)
async def movie_stats(db: AsyncSession = Depends(get_async_session)):
    rows = (await db.execute(select(Movie))).scalars().all()
    return summarize(rows)


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: str, db: AsyncSession = Depends(get_async_session)):
    return {"movie": await _get_movie_or_404(db, movie_id)}


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(
    movie_id: str,
    payload: MovieUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    movie = await _get_movie_or_404(db, movie_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(movie, field, value)

    return {"movie": await _save(db, movie, "update")}


@router.delete("/{movie_id}", response_model=MovieResponse)
async def delete_movie(movie_id: str, db: AsyncSession = Depends(get_async_session)):
    # Soft delete: the row stays, it just stops being listed publicly
    movie = await _get_movie_or_404(db, movie_id)
    movie.is_active = False
    movie = await _save(db, movie, "delete")
    print(f"[movies] Deactivated {movie.id}")
    return {"movie": movie}


@router.post("/{movie_id}/{field}", response_model=MovieResponse)
async def add_tag(
    movie_id: str,
    field: TagField,
    payload: TagIn,
    db: AsyncSession = Depends(get_async_session),
):
    movie = await _get_movie_or_404(db, movie_id)
    tags = list(getattr(movie, field.value) or [])
    if payload.value not in tags:
        # reassign so the JSON column is flagged dirty
        setattr(movie, field.value, tags + [payload.value])
        movie = await _save(db, movie, "update")
    return {"movie": movie}


@router.delete("/{movie_id}/{field}/{index}", response_model=MovieResponse)
async def remove_tag(
    movie_id: str,
    field: TagField,
    index: int,
    db: AsyncSession = Depends(get_async_session),
):
    movie = await _get_movie_or_404(db, movie_id)
    tags = list(getattr(movie, field.value) or [])
    if index < 0 or index >= len(tags):
        raise HTTPException(status_code=404, detail="Tag not found")
    setattr(movie, field.value, tags[:index] + tags[index + 1:])
    return {"movie": await _save(db, movie, "update")}
