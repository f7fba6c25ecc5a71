from gradelookup.db.base import Base
from gradelookup.db.models.student import Student
from gradelookup.db.models.visibility_setting import VisibilitySetting

__all__ = ["Base", "Student", "VisibilitySetting"]
