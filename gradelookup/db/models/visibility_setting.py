# gradelookup/db/models/visibility_setting.py
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from gradelookup.db.base import Base


class VisibilitySetting(Base):
    __tablename__ = "admin_visibility_settings"

    field_name = Column(String, primary_key=True)  # uno de PublicField
    is_visible = Column(Boolean, nullable=False, default=True)
    label = Column(String, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
