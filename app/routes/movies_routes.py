# app/routes/movies_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app import config
from app.database import get_async_session
from app.models.movie_model import Movie
from app.schemas.movie_schemas import LatestMovieOut, MovieResponse

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get("/latest", response_model=List[LatestMovieOut])
async def latest_movies(
    limit: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_async_session),
):
    """Newest active movies for the home page widget."""
    limit = min(limit or config.LATEST_MOVIES_LIMIT, config.LATEST_MOVIES_MAX)
    stmt = (
        select(Movie)
        .where(Movie.is_active.is_(True))
        .order_by(desc(Movie.created_at))
        .limit(limit)
    )
    return (await db.execute(stmt)).scalars().all()


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_public_movie(movie_id: str, db: AsyncSession = Depends(get_async_session)):
    movie = await db.get(Movie, movie_id)
    if not movie or not movie.is_active:
        raise HTTPException(status_code=404, detail="Movie not found")
    return {"movie": movie}
