# gradelookup/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gradelookup.core.exceptions import DuplicateKey, GradeLookupError, MissingColumns, ValidationError

logger = logging.getLogger(__name__)


def _error_body(exc: GradeLookupError) -> dict:
    content = {"error": exc.message, "code": exc.code}
    if isinstance(exc, MissingColumns):
        content["missing_columns"] = exc.names
    elif isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    elif isinstance(exc, DuplicateKey) and exc.dni:
        content["dni"] = exc.dni
    return content


def _first_invalid_field(errors: list):
    # ("body", "dni") -> "dni"; ("path", "field_name") -> "field_name"
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            return ".".join(loc)
    return None


def add_error_handlers(app: FastAPI):
    @app.exception_handler(GradeLookupError)
    async def grade_lookup_error_handler(request: Request, exc: GradeLookupError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    # Cuerpo o parámetros que no pasan los esquemas: mismo formato que ValidationError
    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        field = _first_invalid_field(exc.errors())
        logger.info(f"[validation] {request.method} {request.url.path}: {exc.errors()}")
        message = (
            f"Datos inválidos en el campo '{field}'. Revise el valor enviado."
            if field
            else "Los datos enviados no son válidos."
        )
        return JSONResponse(
            status_code=ValidationError.status_code,
            content=_error_body(ValidationError(message, field=field)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"🔥 Error no controlado en {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Ocurrió un error inesperado. Intente más tarde.",
                "code": "INTERNAL_ERROR",
            },
        )
