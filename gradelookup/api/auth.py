import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from gradelookup.api.deps import get_admin_credentials, require_admin
from gradelookup.core.config import settings
from gradelookup.core.security import AdminCredentials, check_admin_credentials, create_admin_token
from gradelookup.schemas.auth import AdminLogin, AdminOut

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login")
def login(
    form: AdminLogin,
    response: Response,
    credentials: AdminCredentials = Depends(get_admin_credentials),
):
    if not check_admin_credentials(credentials, form.username, form.password):
        logger.warning(f"[auth] Intento de acceso fallido para usuario={form.username!r}")
        raise HTTPException(status_code=401, detail="Nombre de usuario o contraseña incorrectos.")

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=create_admin_token(credentials.username),
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    logger.info(f"[auth] Acceso de administrador: {credentials.username}")
    return {"success": True}


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me", response_model=AdminOut)
def me(admin: AdminOut = Depends(require_admin)):
    return admin
