# gradelookup/api/deps.py
from typing import Generator, Optional

from fastapi import Cookie, Depends, HTTPException, status
from jose import JWTError

from gradelookup.core.config import settings
from gradelookup.core.security import ADMIN_SCOPE, AdminCredentials, decode_access_token
from gradelookup.db.session import SessionLocal
from gradelookup.schemas.auth import AdminOut


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_admin_credentials() -> AdminCredentials:
    """Credenciales del administrador; en tests se sustituye con dependency_overrides."""
    return AdminCredentials(
        username=settings.ADMIN_USERNAME,
        password_hash=settings.ADMIN_PASSWORD_HASH,
    )


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Sesión de administrador requerida",
    )


def require_admin(
    admin_auth: Optional[str] = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
    credentials: AdminCredentials = Depends(get_admin_credentials),
) -> AdminOut:
    if not admin_auth:
        raise _unauthorized()
    try:
        payload = decode_access_token(admin_auth)
    except JWTError:
        raise _unauthorized()

    username = payload.get("sub")
    if payload.get("scope") != ADMIN_SCOPE or username != credentials.username:
        raise _unauthorized()
    return AdminOut(username=username)
