"""create estudiantes_admin and admin_visibility_settings, seed visibility

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from gradelookup.core.visibility import MANAGEABLE_FIELDS


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'estudiantes_admin',
        sa.Column('dni', sa.String(length=15), primary_key=True),
        sa.Column('apellidos', sa.String(), nullable=False),
        sa.Column('nombres', sa.String(), nullable=False),
        sa.Column('materia', sa.String(), nullable=False),
        sa.Column('nota_parcial', sa.String(), nullable=True),
        sa.Column('recuperatorio', sa.String(), nullable=True),
        sa.Column('porcentaje_asistencia', sa.Integer(), nullable=True),
        sa.Column('porcentaje_tp_aprobados', sa.Integer(), nullable=True),
        sa.Column('diario_clase', sa.String(), nullable=True),
        sa.Column('condicion', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_estudiantes_admin_dni', 'estudiantes_admin', ['dni'])

    settings_table = op.create_table(
        'admin_visibility_settings',
        sa.Column('field_name', sa.String(), primary_key=True),
        sa.Column('is_visible', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Una fila por campo gestionable, todas visibles
    op.bulk_insert(
        settings_table,
        [
            {'field_name': field.value, 'is_visible': True, 'label': label}
            for field, label in MANAGEABLE_FIELDS.items()
        ],
    )


def downgrade() -> None:
    op.drop_table('admin_visibility_settings')
    op.drop_index('ix_estudiantes_admin_dni', table_name='estudiantes_admin')
    op.drop_table('estudiantes_admin')
