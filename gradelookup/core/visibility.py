# gradelookup/core/visibility.py
"""
Filtro de visibilidad para la consulta pública de notas.

El registro del alumno se proyecta sobre los campos públicos y luego se
reduce a los que el administrador permite. Lo que la configuración no
menciona se muestra: un campo ausente del mapping, un mapping vacío o uno que
no se pudo cargar (``None``) equivalen a "todo visible".
"""
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional


class PublicField(str, Enum):
    STUDENT_NAME = "studentName"
    DNI = "dni"
    SUBJECT = "subject"
    PARTIAL_GRADE = "partialGrade"
    RECUPERATORIO = "recuperatorio"
    PORCENTAJE_ASISTENCIA = "porcentaje_asistencia"
    PORCENTAJE_TP_APROBADOS = "porcentaje_tp_aprobados"
    DIARIO_CLASE = "diario_clase"
    CONDICION = "condicion"


# Etiquetas para el panel de administración, en el orden en que se muestran
MANAGEABLE_FIELDS: Dict[PublicField, str] = {
    PublicField.STUDENT_NAME: "Nombre Completo del Alumno",
    PublicField.DNI: "DNI del Alumno",
    PublicField.SUBJECT: "Materia Cursada",
    PublicField.PARTIAL_GRADE: "Nota Parcial",
    PublicField.RECUPERATORIO: "Nota Recuperatorio",
    PublicField.PORCENTAJE_ASISTENCIA: "Porcentaje de Asistencia",
    PublicField.PORCENTAJE_TP_APROBADOS: "Porcentaje de TP Aprobados",
    PublicField.DIARIO_CLASE: "Estado del Diario de Clase",
    PublicField.CONDICION: "Condición Final",
}

# Columna almacenada -> campo público (studentName se arma aparte)
_COLUMN_TO_FIELD = {
    "dni": PublicField.DNI,
    "materia": PublicField.SUBJECT,
    "nota_parcial": PublicField.PARTIAL_GRADE,
    "recuperatorio": PublicField.RECUPERATORIO,
    "porcentaje_asistencia": PublicField.PORCENTAJE_ASISTENCIA,
    "porcentaje_tp_aprobados": PublicField.PORCENTAJE_TP_APROBADOS,
    "diario_clase": PublicField.DIARIO_CLASE,
    "condicion": PublicField.CONDICION,
}


def _get(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def build_student_name(apellidos: Optional[str], nombres: Optional[str]) -> str:
    return f"{apellidos or ''} {nombres or ''}".strip()


def build_grade_info(record: Any) -> Dict[str, Any]:
    """Todos los campos públicos de un registro guardado (mapping u objeto ORM)."""
    info: Dict[str, Any] = {
        PublicField.STUDENT_NAME.value: build_student_name(
            _get(record, "apellidos"), _get(record, "nombres")
        )
    }
    for column, field in _COLUMN_TO_FIELD.items():
        info[field.value] = _get(record, column)
    return info


def _normalize(visibility: Optional[Mapping[Any, bool]]) -> Dict[str, bool]:
    if not visibility:
        return {}
    return {
        (key.value if isinstance(key, PublicField) else str(key)): value
        for key, value in visibility.items()
    }


def is_visible(field: PublicField, visibility: Mapping[str, bool]) -> bool:
    # Solo un False explícito oculta el campo
    return visibility.get(field.value) is not False


def filter_grade_info(record: Any, visibility: Optional[Mapping[Any, bool]]) -> Dict[str, Any]:
    """
    Reduce un registro a los campos que permite ``visibility``.

    ``visibility`` asocia nombres de campo (o miembros de ``PublicField``) a
    booleanos. ``None`` o ``{}`` significa configuración no disponible y se
    devuelven todos los campos. Las claves que no son campos públicos se
    ignoran.
    """
    info = build_grade_info(record)
    allowed = _normalize(visibility)
    return {
        field.value: info[field.value]
        for field in PublicField
        if is_visible(field, allowed)
    }


def visibility_map_from_settings(rows: Iterable[Any]) -> Dict[str, bool]:
    return {_get(row, "field_name"): bool(_get(row, "is_visible")) for row in rows}
