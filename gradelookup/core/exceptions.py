# gradelookup/core/exceptions.py
"""Errores de dominio que lanzan los servicios; core/errors.py los traduce a JSON."""
from typing import Iterable, Optional


class GradeLookupError(Exception):
    """Error base. Lleva el estado HTTP y un código estable para el cliente."""
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GradeLookupError):
    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFound(GradeLookupError):
    status_code = 404
    code = "NOT_FOUND"


class NothingVisible(GradeLookupError):
    """El registro existe pero la configuración oculta todos los campos públicos."""
    status_code = 404
    code = "NO_VISIBLE_FIELDS"


class DuplicateKey(GradeLookupError):
    status_code = 409
    code = "DUPLICATE_KEY"

    def __init__(self, message: str, dni: Optional[str] = None):
        super().__init__(message)
        self.dni = dni


class MissingColumns(GradeLookupError):
    status_code = 422
    code = "MISSING_COLUMNS"

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(
            f"Faltan las siguientes columnas en el CSV: {', '.join(self.names)}."
        )


class StoreError(GradeLookupError):
    status_code = 503
    code = "STORE_ERROR"


class ConfigMissing(GradeLookupError):
    status_code = 503
    code = "CONFIG_MISSING"
