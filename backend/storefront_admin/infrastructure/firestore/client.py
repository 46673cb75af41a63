"""Firebase Admin bootstrap — one app, one async Firestore client per process."""

import logging
from functools import lru_cache
from pathlib import Path

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.auth.exceptions import DefaultCredentialsError

from storefront_admin.config import Settings, get_settings
from storefront_admin.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def init_firebase_app(settings: Settings) -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase app.

    With ``FIREBASE_CREDENTIALS_FILE`` set, that service-account key is used;
    otherwise application default credentials apply, which also covers the
    Firestore emulator (``FIRESTORE_EMULATOR_HOST``).
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    cred = None
    if settings.firebase_credentials_file:
        path = Path(settings.firebase_credentials_file)
        if not path.exists():
            raise ConfigurationError(
                "firebase_credentials_file",
                f"Firebase credentials file not found: {path}. "
                "Set FIREBASE_CREDENTIALS_FILE to a service-account key.",
            )
        cred = credentials.Certificate(str(path))

    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase app initialized (project=%s)", settings.firebase_project_id or "default")
    return app


@lru_cache
def get_firestore_client():
    """Cached ``google.cloud.firestore.AsyncClient`` for the default app."""
    try:
        app = init_firebase_app(get_settings())
        return firestore_async.client(app)
    except DefaultCredentialsError as exc:
        raise ConfigurationError(
            "firebase_credentials_file",
            "No Firebase credentials found. Set FIREBASE_CREDENTIALS_FILE or "
            "GOOGLE_APPLICATION_CREDENTIALS.",
        ) from exc
