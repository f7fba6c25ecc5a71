from typing import Optional, Union

from pydantic import BaseModel, Field


class GradeLookupRequest(BaseModel):
    # El servicio rechaza el DNI vacío; aquí solo se acota la longitud
    dni: str = Field(..., max_length=15)


class FilteredGradeView(BaseModel):
    """Todos los campos son opcionales: solo llegan los visibles."""
    studentName: Optional[str] = None
    dni: Optional[str] = None
    subject: Optional[str] = None
    partialGrade: Optional[Union[str, int, float]] = None
    recuperatorio: Optional[Union[str, int, float]] = None
    porcentaje_asistencia: Optional[int] = None
    porcentaje_tp_aprobados: Optional[int] = None
    diario_clase: Optional[str] = None
    condicion: Optional[str] = None


class GradeLookupResponse(BaseModel):
    data: FilteredGradeView
