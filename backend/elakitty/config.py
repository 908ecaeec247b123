# backend/elakitty/config.py
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# backend/elakitty/config.py → ../../.. = <repo root>
REPO_ROOT = Path(__file__).resolve().parents[2]

if os.environ.get("DOTENV_FILE"):
    load_dotenv(os.environ["DOTENV_FILE"])
else:
    load_dotenv(REPO_ROOT / ".env")


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _data_dir() -> Path:
    # inside the container /app/data is a mounted volume
    container_data = Path("/app/data")
    if container_data.exists():
        return container_data
    return REPO_ROOT / "data"


def _default_database_url() -> str:
    db_path = _data_dir() / "app.db"
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


@dataclass
class Settings:
    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL") or _default_database_url()
    )
    media_dir: Path = field(
        default_factory=lambda: Path(os.getenv("MEDIA_DIR") or _data_dir() / "media")
    )
    media_base_url: str = field(
        default_factory=lambda: os.getenv("MEDIA_BASE_URL", "/media").rstrip("/")
    )
    nominatim_url: str = field(
        default_factory=lambda: os.getenv(
            "NOMINATIM_URL", "https://nominatim.openstreetmap.org"
        ).rstrip("/")
    )
    nominatim_user_agent: str = field(
        default_factory=lambda: os.getenv("NOMINATIM_USER_AGENT", "ela-kitty/0.1")
    )
    geocode_timeout: float = field(
        default_factory=lambda: float(os.getenv("GEOCODE_TIMEOUT", "10"))
    )
    allow_dev_login: bool = field(default_factory=lambda: _flag("ALLOW_DEV_LOGIN"))
    cors_origins: list[str] = field(
        default_factory=lambda: [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


settings = Settings()
