"""FastAPI dependency utilities."""

from __future__ import annotations

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from collabhunts.config import Settings, get_settings

bearer_scheme = HTTPBearer(auto_error=False)


def require_cron_secret(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject trigger calls without the shared secret when one is configured."""

    expected = settings.cron_secret
    if not expected:
        return

    provided = credentials.credentials if credentials else ""
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


__all__ = ["require_cron_secret"]
