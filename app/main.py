from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import asyncio

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from app.config import CORS_ALLOW_ORIGINS, DB_SCHEMA
from app.database import Base, engine, AsyncSessionLocal
from app.models import user_model, movie_model, theater_model, showtime_model, booking_model, snack_model  # noqa: F401
from app.routes import auth, admin_movies_routes, admin_users_routes, debug_routes, movies_routes

# 🔒 Rate limiting setup

from app.limiter import limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

app = FastAPI(title="Movie Booking Admin API")

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


def validation_message(exc: RequestValidationError) -> str:
    """First validation error as one readable sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    err = errors[0]
    ctx_error = (err.get("ctx") or {}).get("error")
    if err.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc)
    return f"{field}: {err.get('msg')}" if field else str(err.get("msg"))


# Input problems are client errors: 400 with a single message
@app.exception_handler(RequestValidationError)
async def validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": validation_message(exc)}
    )


# ✅ Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Include your routers
app.include_router(auth.router)
app.include_router(admin_movies_routes.router)
app.include_router(admin_users_routes.router)
app.include_router(debug_routes.router)
app.include_router(movies_routes.router)


async def check_database() -> bool:
    """True when the users table answers a trivial query."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(select(user_model.User.id).limit(1))
        return True
    except SQLAlchemyError as e:
        print(f"[db] Users table not accessible: {e!r}")
        return False


@app.get("/api/health")
async def health():
    ok = await check_database()
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ok" if ok else "degraded", "database": ok},
    )


# ✅ Run DB init on startup
@app.on_event("startup")
async def on_startup():
    # Tiny retry so a momentary DB disconnect doesn't crash the app.
    for attempt in range(2):
        try:
            async with engine.begin() as conn:
                if DB_SCHEMA:
                    await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{DB_SCHEMA}";'))
                await conn.run_sync(Base.metadata.create_all)
            break  # success
        except Exception as e:
            if attempt == 0:
                print(f"[startup] DB init failed, retrying once: {e!r}")
                await asyncio.sleep(0.5)
            else:
                # Tables should already exist from previous runs.
                print(f"[startup] Skipping DB init due to error: {e!r}")

    if await check_database():
        print("[startup] Database initialized successfully")


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
