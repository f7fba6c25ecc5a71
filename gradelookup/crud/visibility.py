from typing import List, Optional

from sqlalchemy.orm import Session

from gradelookup.db.models.visibility_setting import VisibilitySetting


def get_settings(db: Session) -> List[VisibilitySetting]:
    return db.query(VisibilitySetting).all()


def get_setting(db: Session, field_name: str) -> Optional[VisibilitySetting]:
    return db.query(VisibilitySetting).filter(VisibilitySetting.field_name == field_name).first()


def set_visibility(db: Session, setting: VisibilitySetting, is_visible: bool) -> VisibilitySetting:
    setting.is_visible = is_visible
    db.commit()
    db.refresh(setting)
    return setting
