from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


def _blank_to_none(v):
    if v is None:
        return None
    if isinstance(v, str) and not v.strip():
        return None
    return v


class StudentBase(BaseModel):
    apellidos: str = Field(..., min_length=1)
    nombres: str = Field(..., min_length=1)
    materia: str = Field(..., min_length=1)
    nota_parcial: Optional[str] = None
    recuperatorio: Optional[str] = None
    porcentaje_asistencia: Optional[int] = Field(default=None, ge=0, le=100)
    porcentaje_tp_aprobados: Optional[int] = Field(default=None, ge=0, le=100)
    diario_clase: Optional[str] = None
    condicion: str = Field(..., min_length=1)

    @field_validator("apellidos", "nombres", "materia", "condicion", mode="before")
    @classmethod
    def _strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    # "" -> None; las notas numéricas se guardan como texto
    @field_validator("nota_parcial", "recuperatorio", "diario_clase", mode="before")
    @classmethod
    def _nullable_text(cls, v: Union[str, int, float, None]):
        v = _blank_to_none(v)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("porcentaje_asistencia", "porcentaje_tp_aprobados", mode="before")
    @classmethod
    def _percentage(cls, v):
        v = _blank_to_none(v)
        if isinstance(v, str):
            return v.strip()
        return v


class StudentCreate(StudentBase):
    dni: str = Field(..., min_length=5, max_length=15)

    @field_validator("dni", mode="before")
    @classmethod
    def _strip_dni(cls, v):
        return v.strip() if isinstance(v, str) else v


# El DNI no es editable: viene en la ruta, nunca en el cuerpo
class StudentUpdate(StudentBase):
    pass


class StudentOut(BaseModel):
    dni: str
    apellidos: str
    nombres: str
    materia: str
    nota_parcial: Optional[str] = None
    recuperatorio: Optional[str] = None
    porcentaje_asistencia: Optional[int] = None
    porcentaje_tp_aprobados: Optional[int] = None
    diario_clase: Optional[str] = None
    condicion: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
