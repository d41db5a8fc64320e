"""
Firestore client for the Firestore-backed store
"""

from __future__ import annotations

import base64
import json
import logging
import os
from functools import lru_cache
from typing import Any, Callable, Optional, Tuple

import firebase_admin
from firebase_admin import credentials, firestore

from rsvp_seating.core.config import settings
from rsvp_seating.core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _from_json() -> Optional[dict[str, Any]]:
    raw = settings.FIREBASE_CREDENTIALS_JSON
    return json.loads(raw) if raw else None


def _from_base64() -> Optional[dict[str, Any]]:
    raw = settings.FIREBASE_CREDENTIALS_B64
    return json.loads(base64.b64decode(raw).decode("utf-8")) if raw else None


def _from_file() -> Optional[dict[str, Any]]:
    path = settings.FIREBASE_CREDENTIALS_FILE
    if not path or not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


# First source that yields a service-account dict wins
CREDENTIAL_SOURCES: list[Tuple[str, Callable[[], Optional[dict[str, Any]]]]] = [
    ("FIREBASE_CREDENTIALS_JSON", _from_json),
    ("FIREBASE_CREDENTIALS_B64", _from_base64),
    ("FIREBASE_CREDENTIALS_FILE", _from_file),
]


def resolve_service_account() -> Tuple[str, dict[str, Any]]:
    """Return the setting name used and the decoded service-account info"""
    for name, load in CREDENTIAL_SOURCES:
        try:
            info = load()
        except (ValueError, OSError) as exc:
            raise StoreError(f"Unreadable Firebase credentials in {name}: {exc}") from exc
        if info:
            return name, info
    raise StoreError(
        "Firebase credentials not provided. Set one of "
        + ", ".join(name for name, _ in CREDENTIAL_SOURCES)
    )


@lru_cache(maxsize=1)
def get_firestore_client():
    """Cached Firestore client, or None while the SQL store is selected"""
    if not settings.USE_FIREBASE:
        return None

    if not firebase_admin._apps:
        source, info = resolve_service_account()
        firebase_admin.initialize_app(credentials.Certificate(info))
        logger.info(f"Firebase app initialized for project {info.get('project_id')} from {source}")

    return firestore.client()
