# gradelookup/services/csv_import.py
"""
Importación masiva de alumnos desde CSV.

El lote se verifica contra la base con un único ``SELECT ... IN`` y se
escribe con un único ``INSERT``. La verificación y la inserción no forman una
transacción: si otro proceso inserta en el medio, la clave primaria rechaza
el INSERT y todo el lote se informa como fallido.
"""
import csv
import io
import logging
import re
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gradelookup.core.exceptions import MissingColumns
from gradelookup.crud import student as crud_student
from gradelookup.schemas.csv_import import CandidateRecord, ImportResult
from gradelookup.services.base import STORE_ERROR_MESSAGE

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = (
    "dni",
    "apellidos",
    "nombres",
    "materia",
    "nota_parcial",
    "recuperatorio",
    "porcentaje_asistencia",
    "porcentaje_tp_aprobados",
    "diario_clase",
    "condicion",
)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_percentage(value) -> Optional[int]:
    """Entero inicial de ``value`` ("85", "85%", "85.5" -> 85); cualquier otra cosa es None."""
    if value is None or isinstance(value, bool):
        return None
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    number = int(match.group(1))
    if number < 0 or number > 100:
        return None
    return number


def _cell(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_students_csv(text: str) -> List[CandidateRecord]:
    """
    Convierte el texto CSV en registros candidatos.

    Los encabezados se recortan y se comparan sin distinguir mayúsculas, en
    cualquier orden. Si falta alguna columna esperada se lanza
    ``MissingColumns`` antes de leer una sola fila de datos.
    """
    text = text.lstrip("\ufeff")
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise MissingColumns(EXPECTED_COLUMNS)

    reader = csv.reader(lines)
    headers = [h.strip().lower() for h in next(reader)]
    missing = [col for col in EXPECTED_COLUMNS if col not in headers]
    if missing:
        logger.warning(f"[import] Encabezado incompleto, faltan: {missing}")
        raise MissingColumns(missing)

    records = []
    for values in reader:
        row: Dict[str, Optional[str]] = {}
        for index, header in enumerate(headers):
            if header in EXPECTED_COLUMNS and header not in row:
                row[header] = _cell(values[index]) if index < len(values) else None

        records.append(CandidateRecord(
            dni=row["dni"] or "",
            apellidos=row["apellidos"] or "",
            nombres=row["nombres"] or "",
            materia=row["materia"] or "Sin Asignar",
            nota_parcial=row["nota_parcial"],
            recuperatorio=row["recuperatorio"],
            porcentaje_asistencia=row["porcentaje_asistencia"],
            porcentaje_tp_aprobados=row["porcentaje_tp_aprobados"],
            diario_clase=row["diario_clase"],
            condicion=row["condicion"] or "Sin Condición",
        ))
    return records


def _to_insert_row(record: CandidateRecord) -> dict:
    return {
        "dni": record.dni.strip(),
        "apellidos": record.apellidos,
        "nombres": record.nombres,
        "materia": record.materia,
        "nota_parcial": record.nota_parcial or None,
        "recuperatorio": record.recuperatorio or None,
        "porcentaje_asistencia": parse_percentage(record.porcentaje_asistencia),
        "porcentaje_tp_aprobados": parse_percentage(record.porcentaje_tp_aprobados),
        "diario_clase": record.diario_clase or None,
        "condicion": record.condicion,
    }


def import_batch(db: Session, records: Sequence[CandidateRecord]) -> ImportResult:
    """
    Inserta los registros cuyo DNI todavía no está guardado.

    Cada fila de entrada termina en un único grupo: insertada, omitida porque
    el DNI ya existe, marcada como repetida dentro del lote o descartada por
    no tener DNI.
    """
    result = ImportResult()
    if not records:
        result.error_code = "EMPTY_BATCH"
        result.error = "No se proporcionaron datos de estudiantes."
        return result

    with_dni = [r for r in records if r.dni.strip()]
    result.dropped_empty_dni = len(records) - len(with_dni)
    if not with_dni:
        result.error_code = "EMPTY_BATCH"
        result.error = "El archivo CSV no contenía DNIs válidos."
        return result

    incoming = [r.dni.strip() for r in with_dni]
    logger.info(f"[import] DNIs entrantes: {len(incoming)} (sin DNI: {result.dropped_empty_dni})")

    try:
        existing = crud_student.get_existing_dnis(db, set(incoming))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ [import] Error al verificar duplicados: {e}")
        result.error_code = "STORE_ERROR"
        result.error = f"Error al verificar duplicados. {STORE_ERROR_MESSAGE}"
        return result

    to_insert = []
    seen = set()
    for record, dni in zip(with_dni, incoming):
        if dni in existing:
            result.skipped_duplicate_ids.append(dni)
        elif dni in seen:
            # repetido dentro del mismo CSV: se informa, no se fusiona
            result.duplicate_in_batch_ids.append(dni)
        else:
            seen.add(dni)
            to_insert.append(_to_insert_row(record))

    logger.info(
        f"[import] Para insertar: {len(to_insert)}, ya existentes: {len(result.skipped_duplicate_ids)}, "
        f"repetidos en el lote: {len(result.duplicate_in_batch_ids)}"
    )

    if not to_insert:
        result.error_code = "NOTHING_TO_INSERT"
        if result.skipped_duplicate_ids:
            result.error = "Todos los DNIs del CSV ya existen o no había nuevos estudiantes para importar."
        else:
            result.error = "No hay nuevos estudiantes para importar del CSV."
        return result

    try:
        result.inserted_count = crud_student.bulk_insert_students(db, to_insert)
    except IntegrityError as e:
        db.rollback()
        logger.error(f"❌ [import] DNI duplicado durante la inserción masiva: {e}")
        result.inserted_count = 0
        result.error_code = "DUPLICATE_KEY"
        result.error = (
            "Error de DNI duplicado durante la inserción masiva: otro proceso cargó alguno de estos DNIs. "
            "No se importó ningún alumno; vuelva a ejecutar la importación."
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ [import] Error al insertar estudiantes: {e}")
        result.inserted_count = 0
        result.error_code = "STORE_ERROR"
        result.error = f"Error al insertar estudiantes. {STORE_ERROR_MESSAGE}"
    else:
        logger.info(f"✅ [import] Insertados {result.inserted_count} alumnos")
    return result


def import_students_csv(db: Session, text: str) -> ImportResult:
    return import_batch(db, parse_students_csv(text))


def csv_template() -> str:
    """Encabezado más una fila de ejemplo, para que el administrador la complete."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPECTED_COLUMNS)
    writer.writerow(["30111222", "Diaz", "Ana", "Matemática", "7", "", "85", "90", "Completo", "REGULAR"])
    return out.getvalue()
