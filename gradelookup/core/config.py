# gradelookup/core/config.py
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Consulta de Notas API"

    SECRET_KEY: str = "change-me-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 días

    DATABASE_URL: str = "sqlite:///./grades.db"

    # Cookie de sesión del administrador
    AUTH_COOKIE_NAME: str = "admin-auth"

    # Solo el hash de la contraseña, nunca el valor en claro
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str = ""

    # Separados por coma: "http://a,http://b"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:9002"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    @property
    def cookie_secure(self) -> bool:
        return self.ENV == "prod"


# La instancia se crea UNA SOLA VEZ
settings = Settings()
