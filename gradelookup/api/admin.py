# gradelookup/api/admin.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from gradelookup.api.deps import get_db, require_admin
from gradelookup.core.exceptions import ValidationError
from gradelookup.core.visibility import PublicField
from gradelookup.schemas.csv_import import ImportResult
from gradelookup.schemas.student import StudentCreate, StudentOut, StudentUpdate
from gradelookup.schemas.visibility import VisibilitySettingUpdate
from gradelookup.services import csv_import
from gradelookup.services import students as students_service
from gradelookup.services import visibility as visibility_service

logger = logging.getLogger(__name__)

# Todo el router exige la cookie de administrador
router = APIRouter(dependencies=[Depends(require_admin)])


# --- Alumnos ---

@router.get("/students")
def list_students(
    dni: Optional[str] = Query(None, description="Filtro parcial por DNI"),
    db: Session = Depends(get_db),
):
    students = students_service.list_students(db, dni_filter=dni)
    return {"data": [StudentOut.model_validate(s) for s in students]}


@router.post("/students", status_code=status.HTTP_201_CREATED)
def create_student(student_in: StudentCreate, db: Session = Depends(get_db)):
    student = students_service.create_student(db, student_in)
    return {"data": StudentOut.model_validate(student)}


@router.delete("/students")
def delete_all_students(db: Session = Depends(get_db)):
    deleted = students_service.delete_all_students(db)
    return {"data": {"deleted": deleted}}


@router.post("/students/import", response_model=ImportResult)
async def import_students(file: UploadFile = File(...), db: Session = Depends(get_db)):
    content = await file.read()
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("El archivo CSV debe estar codificado en UTF-8.", field="file")

    logger.info(f"[import] Archivo recibido: {file.filename} ({len(content)} bytes)")
    return csv_import.import_students_csv(db, text)


@router.get("/students/import/template", response_class=PlainTextResponse)
def import_template():
    return PlainTextResponse(
        csv_import.csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="alumnos_plantilla.csv"'},
    )


@router.get("/students/{dni}")
def get_student(dni: str, db: Session = Depends(get_db)):
    return {"data": StudentOut.model_validate(students_service.get_student(db, dni))}


@router.put("/students/{dni}")
def update_student(dni: str, student_in: StudentUpdate, db: Session = Depends(get_db)):
    student = students_service.update_student(db, dni, student_in)
    return {"data": StudentOut.model_validate(student)}


@router.delete("/students/{dni}")
def delete_student(dni: str, db: Session = Depends(get_db)):
    students_service.delete_student(db, dni)
    return {"data": {"dni": dni}}


# --- Visibilidad ---

@router.get("/visibility")
def get_visibility_settings(db: Session = Depends(get_db)):
    return {"data": visibility_service.get_visibility_settings(db)}


@router.put("/visibility/{field_name}")
def update_visibility_setting(
    field_name: PublicField,
    update: VisibilitySettingUpdate,
    db: Session = Depends(get_db),
):
    setting = visibility_service.update_visibility_setting(db, field_name, update.is_visible)
    return {"data": setting}
