import os
from dotenv import load_dotenv

load_dotenv()

# --- Environment ---
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_DEVELOPMENT = ENVIRONMENT == "development"

# --- Database ---
# Default to local SQLite, but prefer environment variable (for Render/managed hosting)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/calendar.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- HTTP API ---
API_PREFIX = os.getenv("API_PREFIX", "/api")
PORT = int(os.getenv("PORT", "5000"))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://localhost:5000",
    ).split(",")
    if o.strip()
]
CORS_ORIGIN_REGEX = os.getenv("CORS_ORIGIN_REGEX", r"https://.*\.onrender\.com")

# Built single-page frontend, served when present
FRONTEND_DIST = os.getenv(
    "FRONTEND_DIST",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "dist"),
)

# --- Python API client ---
API_URL = os.getenv("API_URL", f"http://localhost:{PORT}{API_PREFIX}")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "10"))

# --- Keep-alive pinger ---
BACKEND_URL = os.getenv("BACKEND_URL", f"http://localhost:{PORT}")
PING_INTERVAL_SECONDS = int(os.getenv("PING_INTERVAL_SECONDS", str(14 * 60)))

# --- Calendar ---
# 0 = Monday ... 6 = Sunday
WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "6"))
