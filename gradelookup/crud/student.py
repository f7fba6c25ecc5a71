from typing import Iterable, List, Optional, Set

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from gradelookup.db.models.student import Student


def get_student_by_dni(db: Session, dni: str) -> Optional[Student]:
    return db.query(Student).filter(Student.dni == dni).first()


def get_students(db: Session, dni_filter: Optional[str] = None) -> List[Student]:
    query = db.query(Student)
    if dni_filter:
        query = query.filter(Student.dni.ilike(f"%{dni_filter}%"))
    return query.order_by(Student.apellidos.asc(), Student.nombres.asc()).all()


def create_student(db: Session, student_data: dict) -> Student:
    db_student = Student(**student_data)
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return db_student


def update_student(db: Session, student: Student, student_data: dict) -> Student:
    for key, value in student_data.items():
        if key == "dni":
            continue
        setattr(student, key, value)
    db.commit()
    db.refresh(student)
    return student


def delete_student(db: Session, student: Student) -> None:
    db.delete(student)
    db.commit()


def delete_all_students(db: Session) -> int:
    result = db.execute(delete(Student))
    db.commit()
    return result.rowcount or 0


def get_existing_dnis(db: Session, dnis: Iterable[str]) -> Set[str]:
    """Una sola consulta: cuáles de ``dnis`` ya están guardados."""
    dnis = list(dnis)
    if not dnis:
        return set()
    rows = db.execute(select(Student.dni).where(Student.dni.in_(dnis))).scalars().all()
    return set(rows)


def bulk_insert_students(db: Session, rows: List[dict]) -> int:
    # Un solo INSERT para todo el lote; la PK es el respaldo ante carreras
    if not rows:
        return 0
    db.execute(insert(Student), rows)
    db.commit()
    return len(rows)
