"""Request identity. Tokens are issued and verified upstream; the gateway forwards X-User-Id."""

import uuid

from fastapi import Header, HTTPException

from liftlog.core.config import get_settings


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> uuid.UUID:
    """Resolve the acting user; falls back to the configured default user."""
    if not x_user_id:
        return get_settings().default_user_id
    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-Id must be a UUID")
