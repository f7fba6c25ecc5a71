# gradelookup/services/students.py
"""ABM de alumnos para el administrador. Sin filtro de visibilidad: el administrador ve todo."""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gradelookup.core.exceptions import DuplicateKey, NotFound, ValidationError
from gradelookup.crud import student as crud_student
from gradelookup.db.models.student import Student
from gradelookup.schemas.student import StudentCreate, StudentUpdate
from gradelookup.services.base import store_error

logger = logging.getLogger(__name__)


def _require_dni(dni: str) -> str:
    dni = (dni or "").strip()
    if not dni:
        raise ValidationError("El DNI es requerido.", field="dni")
    return dni


def list_students(db: Session, dni_filter: Optional[str] = None) -> List[Student]:
    try:
        return crud_student.get_students(db, dni_filter=(dni_filter or "").strip() or None)
    except SQLAlchemyError as e:
        raise store_error(db, "list_students", dni_filter, e)


def get_student(db: Session, dni: str) -> Student:
    dni = _require_dni(dni)
    try:
        student = crud_student.get_student_by_dni(db, dni)
    except SQLAlchemyError as e:
        raise store_error(db, "get_student", dni, e)
    if not student:
        raise NotFound(f"No existe un alumno con el DNI: {dni}.")
    return student


def create_student(db: Session, student_in: StudentCreate) -> Student:
    dni = _require_dni(student_in.dni)
    logger.info(f"[create_student] Alta de alumno dni={dni}")
    student = None
    try:
        if crud_student.get_student_by_dni(db, dni) is None:
            student = crud_student.create_student(db, student_in.model_dump())
    except IntegrityError:
        # otro proceso insertó el mismo DNI entre la consulta y el INSERT
        db.rollback()
    except SQLAlchemyError as e:
        raise store_error(db, "create_student", dni, e)

    if student is None:
        logger.warning(f"[create_student] DNI duplicado: {dni}")
        raise DuplicateKey(f"Ya existe un alumno con el DNI: {dni}.", dni=dni)

    logger.info(f"✅ [create_student] Alumno creado dni={student.dni}")
    return student


def update_student(db: Session, dni: str, student_in: StudentUpdate) -> Student:
    student = get_student(db, dni)
    try:
        student = crud_student.update_student(db, student, student_in.model_dump())
    except SQLAlchemyError as e:
        raise store_error(db, "update_student", dni, e)
    logger.info(f"✅ [update_student] Alumno actualizado dni={student.dni}")
    return student


def delete_student(db: Session, dni: str) -> None:
    student = get_student(db, dni)
    try:
        crud_student.delete_student(db, student)
    except SQLAlchemyError as e:
        raise store_error(db, "delete_student", dni, e)
    logger.info(f"[delete_student] Alumno eliminado dni={dni}")


def delete_all_students(db: Session) -> int:
    # Sin papelera: el borrado es definitivo
    try:
        deleted = crud_student.delete_all_students(db)
    except SQLAlchemyError as e:
        raise store_error(db, "delete_all_students", None, e)
    logger.warning(f"[delete_all_students] Eliminados {deleted} alumnos")
    return deleted
