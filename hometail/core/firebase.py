import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, auth

from hometail.core.config import settings

logger = logging.getLogger(__name__)


def _ensure_app():
    # initialize once, on first token check rather than at import time
    if firebase_admin._apps:
        return
    if not settings.FIREBASE_CREDENTIALS:
        raise RuntimeError("FIREBASE_CREDENTIALS is not configured")
    logger.info("Loading Firebase credentials from %s", settings.FIREBASE_CREDENTIALS)
    cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS)
    firebase_admin.initialize_app(cred)
    logger.info("Firebase Admin SDK initialized")


def verify_firebase_token(id_token: str) -> Optional[dict]:
    try:
        _ensure_app()
        # allow 60s of clock skew between client and server
        return auth.verify_id_token(
            id_token,
            check_revoked=False,
            clock_skew_seconds=60,
        )
    except Exception as e:
        logger.warning("Firebase token verification failed: %s: %s", type(e).__name__, e)
        return None
