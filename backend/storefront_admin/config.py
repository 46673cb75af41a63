import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Storefront Admin API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:9002"]

    # ERPNext resource API
    erpnext_api_url: str = ""
    erpnext_guest_api_key: str = ""
    erpnext_guest_api_secret: str = ""
    erpnext_admin_api_key: str = ""
    erpnext_admin_api_secret: str = ""

    # Firestore (firebase-admin). Empty credentials file → application default credentials
    firebase_credentials_file: str = ""
    firebase_project_id: str = ""

    # Table behaviour
    request_timeout_seconds: float = 20.0
    filter_debounce_ms: int = 300
    client_fetch_cap: int = 1000
    page_size_options: list[int] = [20, 50, 100]
    default_page_size: int = 20

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore (ERPNext calls)
    log_level_firestore: str = "WARNING"     # google.cloud.firestore + adapter
    log_level_table: str = "INFO"            # TableController / Debouncer
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise values that are commonly mistyped in .env files."""
        object.__setattr__(self, "erpnext_api_url", self.erpnext_api_url.strip().rstrip("/"))
        valid_sizes = sorted({size for size in self.page_size_options if size > 0})
        if not valid_sizes:
            _config_logger.warning("PAGE_SIZE_OPTIONS has no positive sizes; using defaults")
            valid_sizes = [20, 50, 100]
        object.__setattr__(self, "page_size_options", valid_sizes)
        if self.default_page_size not in valid_sizes:
            object.__setattr__(self, "default_page_size", valid_sizes[0])

    @property
    def filter_debounce_seconds(self) -> float:
        return max(self.filter_debounce_ms, 0) / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
