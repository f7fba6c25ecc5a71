# gradelookup/db/__init__.py
# Importa todos los modelos para que Base.metadata los conozca (Alembic, tests)

from gradelookup.db.base import Base
from gradelookup.db.models.student import Student
from gradelookup.db.models.visibility_setting import VisibilitySetting

__all__ = ["Base", "Student", "VisibilitySetting"]
