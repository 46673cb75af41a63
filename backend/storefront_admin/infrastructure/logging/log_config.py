"""Centralized logging configuration.

Applies per-category log levels from Settings so that chatty loggers (the
Firestore SDK, httpx/httpcore on every ERPNext call) can be turned down
without losing the table activity log.

Usage:
    from storefront_admin.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from storefront_admin.config import get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_http": [
        "httpx",
        "httpcore",
        "storefront_admin.infrastructure.erpnext",
    ],
    "log_level_firestore": [
        "google.cloud.firestore",
        "google.api_core",
        "storefront_admin.infrastructure.firestore",
    ],
    "log_level_table": [
        "storefront_admin.application.table",
        "TableActivity",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
}


def setup_logging() -> None:
    """Configure Python logging levels from application settings."""
    settings = get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn usually installs a handler; tests and scripts may not.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)-8s %(name)s — %(message)s")
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, http=%s, firestore=%s, table=%s, uvicorn=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_firestore,
        settings.log_level_table,
        settings.log_level_uvicorn,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
