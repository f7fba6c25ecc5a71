# gradelookup/core/security.py
import hmac
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from gradelookup.core.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ADMIN_SCOPE = "admin"


@dataclass(frozen=True)
class AdminCredentials:
    username: str
    password_hash: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # hash mal formado en la configuración
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def check_admin_credentials(credentials: AdminCredentials, username: str, password: str) -> bool:
    """Compara el usuario en tiempo constante y verifica la contraseña con passlib."""
    username_ok = hmac.compare_digest(username.encode(), credentials.username.encode())
    password_ok = verify_password(password, credentials.password_hash)
    return username_ok and password_ok


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_admin_token(username: str) -> str:
    return create_access_token({"sub": username, "scope": ADMIN_SCOPE})


def decode_access_token(token: str) -> dict:
    """Decodifica el JWT y devuelve el payload"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        raise JWTError("Could not validate credentials")
