"""Application configuration loaded from the environment."""

import os

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(dotenv_path=os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".env")))

# PostgreSQL
POSTGRES_CONFIG = {
    "host": os.getenv("POSTGRES_HOST", "localhost"),
    "port": int(os.getenv("POSTGRES_PORT", "5432")),
    "database": os.getenv("POSTGRES_DB", "portfi"),
    "user": os.getenv("POSTGRES_USER", "postgres"),
    "password": os.getenv("POSTGRES_PASSWORD", "postgres"),
}
DATABASE_URL = os.getenv("DATABASE_URL", "")

# Redis
REDIS_CONFIG = {
    "host": os.getenv("REDIS_HOST", "localhost"),
    "port": int(os.getenv("REDIS_PORT", "6379")),
    "db": int(os.getenv("REDIS_DB", "0")),
}
CACHE_TTL = int(os.getenv("CACHE_TTL", "3600"))

# GitHub
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "").strip()
GITHUB_TIMEOUT = float(os.getenv("GITHUB_TIMEOUT", "10"))
GITHUB_CACHE_TTL = int(os.getenv("GITHUB_CACHE_TTL", "900"))

# Auth (Supabase splits its session cookie in two chunks)
AUTH_COOKIE_NAMES = (
    os.getenv("AUTH_COOKIE_NAME_1", "sb-zwuxrlpqnokmjcbmlxla-auth-token.0"),
    os.getenv("AUTH_COOKIE_NAME_2", "sb-zwuxrlpqnokmjcbmlxla-auth-token.1"),
)
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET", "").strip()

# Person ids whose portfolios are shown as examples on the landing page
EXAMPLE_PORTFOLIO_HOLDER_IDS = frozenset(
    pid.strip()
    for pid in os.getenv(
        "EXAMPLE_PORTFOLIO_HOLDER_IDS",
        "a1b2c3d4-e5f6-g7h8-i9j0-k1l2m3n4o5p,"
        "q6r7s8t9-u0v1-w2x3-y4z5-0a1b2c3d4e5f,"
        "6g7h8i9-j0k1-l2m3-n4o5-p6q7r8s9t0u,"
        "v1w2x3y4-z5a6-b7c8-d9e0-f1g2h3i4j5k6",
    ).split(",")
    if pid.strip()
)

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
