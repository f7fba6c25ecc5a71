from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from gradelookup.core.visibility import PublicField


class VisibilitySettingOut(BaseModel):
    field_name: PublicField
    is_visible: bool
    label: str
    updated_at: Optional[datetime] = None
    configured: bool = True  # False: no hay fila en la tabla, se asume visible

    class Config:
        from_attributes = True


class VisibilitySettingUpdate(BaseModel):
    is_visible: bool
