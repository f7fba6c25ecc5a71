# gradelookup/services/lookup.py
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gradelookup.core.exceptions import NotFound, NothingVisible, ValidationError
from gradelookup.core.visibility import filter_grade_info
from gradelookup.crud import student as crud_student
from gradelookup.services.base import store_error
from gradelookup.services.visibility import load_visibility_map

logger = logging.getLogger(__name__)


def lookup_grades(db: Session, dni: str) -> Dict[str, Any]:
    """
    Consulta pública: el registro del alumno reducido a los campos visibles.

    Lanza ValidationError (DNI vacío), NotFound (no existe el registro),
    StoreError (base inaccesible) o NothingVisible (el registro existe pero
    la configuración oculta todos los campos).
    """
    dni = (dni or "").strip()
    if not dni:
        raise ValidationError("El DNI no puede estar vacío.", field="dni")

    logger.info(f"[lookup] Búsqueda de notas para DNI: {dni}")
    try:
        student = crud_student.get_student_by_dni(db, dni)
    except SQLAlchemyError as e:
        raise store_error(db, "lookup", dni, e)

    if student is None:
        logger.warning(f"[lookup] No se encontró el DNI: {dni}")
        raise NotFound(f"No se encontraron datos para el DNI: {dni}. Verifique el DNI.")

    visibility = load_visibility_map(db)
    filtered = filter_grade_info(student, visibility)
    logger.debug(f"[lookup] Visibilidad aplicada: {visibility} -> campos {list(filtered)}")

    if not filtered and visibility:
        raise NothingVisible(
            f"No hay campos visibles configurados para mostrar para el DNI: {dni}. "
            f"Contacte al administrador."
        )
    return filtered
