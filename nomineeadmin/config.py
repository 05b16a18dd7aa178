"""Configuration: env, API bind address, nominee store location."""
import os
from pathlib import Path

from dotenv import load_dotenv


def env_flag(name: str, default: str = "0") -> bool:
    """True for 1/true/yes (any case)."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


# Base paths (project root = parent of nomineeadmin package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so NOMINEE_GATEWAY_URL etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("NOMINEE_DATA_DIR", str(BASE_DIR / "data")))
NOMINATIONS_PATH = DATA_DIR / "nominations.json"

# API
API_HOST = os.getenv("NOMINEE_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("NOMINEE_API_PORT", "8000"))
# Auto-reload on code changes (development only)
API_RELOAD = env_flag("NOMINEE_API_RELOAD")
# Comma-separated; "*" allows any origin (admin UI dev server)
CORS_ORIGINS = [
    o.strip() for o in os.getenv("NOMINEE_CORS_ORIGINS", "*").split(",") if o.strip()
]

# Remote nominee store, e.g. http://localhost:5000/api/nominees
# Empty: records are kept in NOMINATIONS_PATH instead
GATEWAY_URL = os.getenv("NOMINEE_GATEWAY_URL", "")
GATEWAY_TIMEOUT_SEC = float(os.getenv("NOMINEE_GATEWAY_TIMEOUT", "10"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
