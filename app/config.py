import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL")
# Postgres schema for every table; leave unset to use the default schema
DB_SCHEMA = os.getenv("DB_SCHEMA") or None
SQL_ECHO = _flag("SQL_ECHO", "false")

SUPABASE_URL = (os.getenv("SUPABASE_URL") or "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")
AUTH_HTTP_TIMEOUT = float(os.getenv("AUTH_HTTP_TIMEOUT", "10"))

PUBLIC_ORIGIN = os.getenv("PUBLIC_ORIGIN", "http://localhost:3000").rstrip("/")

# make-admin without authentication; never enable outside local setups
ENABLE_DEBUG_ROUTES = _flag("ENABLE_DEBUG_ROUTES", "false")

RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "5/minute")

LATEST_MOVIES_LIMIT = int(os.getenv("LATEST_MOVIES_LIMIT", "8"))
LATEST_MOVIES_MAX = int(os.getenv("LATEST_MOVIES_MAX", "50"))

CORS_ALLOW_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if o.strip()
]
