# gradelookup/services/visibility.py
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gradelookup.core.exceptions import ConfigMissing, NotFound
from gradelookup.core.visibility import MANAGEABLE_FIELDS, PublicField, visibility_map_from_settings
from gradelookup.crud import visibility as crud_visibility
from gradelookup.schemas.visibility import VisibilitySettingOut
from gradelookup.services.base import store_error

logger = logging.getLogger(__name__)

TABLE_NAME = "admin_visibility_settings"


def get_visibility_settings(db: Session) -> List[VisibilitySettingOut]:
    """Una entrada por campo gestionable; los que no tienen fila se muestran visibles."""
    try:
        rows = crud_visibility.get_settings(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.critical(f"🚨 [get_visibility_settings] No se pudo leer '{TABLE_NAME}': {e}")
        raise ConfigMissing(
            f"Error crítico: la tabla '{TABLE_NAME}' no existe o no es accesible. "
            f"Créela y popúlela ejecutando las migraciones (alembic upgrade head). "
            f"Mientras tanto los alumnos ven todos los campos. (Detalle: {e.__class__.__name__})"
        )

    stored = {row.field_name: row for row in rows}
    result = []
    for field, label in MANAGEABLE_FIELDS.items():
        row = stored.get(field.value)
        if row is None:
            result.append(VisibilitySettingOut(
                field_name=field, is_visible=True, label=label, updated_at=None, configured=False
            ))
        else:
            result.append(VisibilitySettingOut(
                field_name=field,
                is_visible=row.is_visible,
                label=row.label or label,
                updated_at=row.updated_at,
                configured=True,
            ))
    return result


def update_visibility_setting(db: Session, field: PublicField, is_visible: bool) -> VisibilitySettingOut:
    logger.info(f"[update_visibility_setting] {field.value} -> {is_visible}")
    try:
        setting = crud_visibility.get_setting(db, field.value)
        if setting is not None:
            setting = crud_visibility.set_visibility(db, setting, is_visible)
    except SQLAlchemyError as e:
        raise store_error(db, "update_visibility_setting", field.value, e)

    if setting is None:
        raise NotFound(
            f"Error al actualizar '{field.value}': el campo no existe en la configuración de visibilidad. "
            f"Asegúrese de que la tabla '{TABLE_NAME}' esté correctamente poblada."
        )
    return VisibilitySettingOut.model_validate(setting)


def load_visibility_map(db: Session) -> Optional[Dict[str, bool]]:
    """Mapping para la consulta pública. ``None`` si la tabla no se puede leer."""
    try:
        rows = crud_visibility.get_settings(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.critical(
            f"🚨 [load_visibility_map] Configuración de visibilidad inaccesible, "
            f"se muestran todos los campos: {e}"
        )
        return None
    return visibility_map_from_settings(rows)
