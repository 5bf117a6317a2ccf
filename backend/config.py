# backend/config.py

import os

from dotenv import load_dotenv

# ================= ENV =================
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))
load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


# ---------------- SECURITY ----------------
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
TOKEN_EXPIRE_HOURS = int(os.getenv("TOKEN_EXPIRE_HOURS", "24"))

if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY missing in .env!")

# Demo key directory (api key -> user id, display name)
API_KEYS = {
    "demo-key-123": (1, "Demo User"),
    "admin-key-456": (2, "Admin User"),
}

# ---------------- DATABASE ----------------
# If DATABASE_URL is NOT provided -> use local SQLite
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./app.db")

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_POOL_MAX_OVERFLOW = int(os.getenv("DB_POOL_MAX_OVERFLOW", "0"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "10"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "30"))
DB_ECHO = _flag("DB_ECHO")

# ---------------- HTTP ----------------
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
