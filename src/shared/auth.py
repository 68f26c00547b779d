"""
Admin session gate.

A session is an HS256-signed JWT carrying an "email" claim that must match
ADMIN_EMAIL. Browsers send it in the session cookie; scripts can send it as

    Authorization: Bearer <token>

The header wins when both are present. The check runs on every request and
nothing about the session is cached between requests.
"""

import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from shared.config import ADMIN_EMAIL, SESSION_COOKIE, SESSION_SECRET

log = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)


def require_admin_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_security),
    session: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
) -> str:
    """
    Dependency declared first on every admin route. Returns the admin email.

    Raises before the route body runs, so a rejected request never reaches
    form decoding or the repository.
    """
    token = credentials.credentials if credentials else session
    if not token:
        log.warning("Admin request without a session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not SESSION_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="SESSION_SECRET not configured",
        )

    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=["HS256"])
    except ExpiredSignatureError:
        log.warning("Admin request with an expired session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        log.warning("Admin request with an invalid session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    email: str | None = payload.get("email")
    if not email or not ADMIN_EMAIL or email.lower() != ADMIN_EMAIL.lower():
        log.warning("Non-admin session rejected: %s", email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )

    return email
