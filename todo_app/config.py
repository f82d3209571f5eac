from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the project root .env (if present).
PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./todo_app.db")
TODO_STORAGE_KEY = os.getenv("TODO_STORAGE_KEY", "todos")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT") or "4000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "30"))

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:4200")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]


def get_openai_api_key() -> str | None:
    """Read the AI credential at call time so it can be set after startup."""
    key = os.getenv(OPENAI_API_KEY_ENV, "").strip()
    return key or None
