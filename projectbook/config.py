from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from repo root and projectbook/.env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path(__file__).resolve().parent / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./projectbook.db")
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Where unauthenticated and unauthorized browser requests are sent.
SIGN_IN_PATH = os.getenv("SIGN_IN_PATH", "/users/sign_in")
LANDING_PATH = os.getenv("LANDING_PATH", "/")

PASSWORD_MIN_LENGTH = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))
MAIL_FROM = os.getenv("MAIL_FROM", "support@example.com")
