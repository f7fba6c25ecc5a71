# gradelookup/services/base.py
"""Utilidades comunes a los servicios."""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from gradelookup.core.exceptions import StoreError

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "No se pudo acceder a la base de datos. Intente más tarde."


def store_error(db: Session, operation: str, key: Optional[str], exc: Exception) -> StoreError:
    """Hace rollback, registra el error con contexto y arma el StoreError para el usuario."""
    db.rollback()
    logger.error(f"❌ [{operation}] Error de base de datos (clave={key}): {exc}")
    return StoreError(STORE_ERROR_MESSAGE)
