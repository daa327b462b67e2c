from pathlib import Path
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic import BaseModel

REPO_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_DATABASE_URL = "sqlite:///./taskgen.db"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class Settings(BaseModel):
    """Process configuration, built once at startup and passed around explicitly."""
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    gemini_timeout: float = 30.0
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    log_dir: Optional[str] = None


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load .env (if present) and read settings from the environment."""
    load_dotenv(env_file or REPO_ROOT / ".env")

    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
        gemini_timeout=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30")),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR") or None,
    )
