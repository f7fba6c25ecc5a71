from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gradelookup.api.deps import get_db
from gradelookup.schemas.grades import GradeLookupRequest, GradeLookupResponse
from gradelookup.services.lookup import lookup_grades

router = APIRouter()


# Público: sin sesión. Los errores salen como {"error", "code"} desde core/errors.py
# exclude_unset: los campos ocultos no aparecen; un campo visible en null sí
@router.post("/lookup", response_model=GradeLookupResponse, response_model_exclude_unset=True)
def lookup(request: GradeLookupRequest, db: Session = Depends(get_db)):
    return {"data": lookup_grades(db, request.dni)}
