from typing import List, Optional

from pydantic import BaseModel, Field


class CandidateRecord(BaseModel):
    """Una fila de datos del CSV de importación, ya recortada."""
    dni: str = ""
    apellidos: str = ""
    nombres: str = ""
    materia: str = "Sin Asignar"
    nota_parcial: Optional[str] = None
    recuperatorio: Optional[str] = None
    porcentaje_asistencia: Optional[str] = None
    porcentaje_tp_aprobados: Optional[str] = None
    diario_clase: Optional[str] = None
    condicion: str = "Sin Condición"


class ImportResult(BaseModel):
    inserted_count: int = 0
    skipped_duplicate_ids: List[str] = Field(default_factory=list)
    duplicate_in_batch_ids: List[str] = Field(default_factory=list)
    dropped_empty_dni: int = 0
    error: Optional[str] = None
    error_code: Optional[str] = None
