# gradelookup/db/models/student.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from gradelookup.db.base import Base


class Student(Base):
    __tablename__ = "estudiantes_admin"

    dni = Column(String(15), primary_key=True, index=True)  # no se modifica después del alta
    apellidos = Column(String, nullable=False)
    nombres = Column(String, nullable=False)
    materia = Column(String, nullable=False)

    # Las notas pueden ser "7", "A", "Ausente"... se guardan como texto
    nota_parcial = Column(String, nullable=True)
    recuperatorio = Column(String, nullable=True)

    porcentaje_asistencia = Column(Integer, nullable=True)  # 0-100
    porcentaje_tp_aprobados = Column(Integer, nullable=True)  # 0-100
    diario_clase = Column(String, nullable=True)
    condicion = Column(String, nullable=False)  # "REGULAR", "LIBRE", "PROMOCIONADO"...

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
