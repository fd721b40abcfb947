"""MongoDB client helpers."""

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient

from legacy_vault.core.config import settings

_client: Any | None = None


def get_mongo_client() -> Any:
    """Return a singleton Motor client."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    return _client


def get_registrations_collection() -> Any:
    """Return the pending two-step registrations collection."""
    client = get_mongo_client()
    return client[settings.mongo_db]["pending_registrations"]
