"""seed permission catalogue and default roles

Revision ID: 0002_seed_roles
Revises: 0001_initial
Create Date: 2026-10-19 00:00:00.000000
"""

import uuid
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

from app.models.constants import DEFAULT_ROLE_PERMISSIONS, Permission


revision: str = '0002_seed_roles'
down_revision: str | None = '0001_initial'
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


permissions_table = sa.table(
    'permissions',
    sa.column('id', sa.Uuid(as_uuid=True)),
    sa.column('name', sa.String),
    sa.column('description', sa.Text),
)
roles_table = sa.table(
    'roles',
    sa.column('id', sa.Uuid(as_uuid=True)),
    sa.column('name', sa.String),
    sa.column('description', sa.Text),
)
role_permissions_table = sa.table(
    'role_permissions',
    sa.column('id', sa.Uuid(as_uuid=True)),
    sa.column('role_id', sa.Uuid(as_uuid=True)),
    sa.column('permission_id', sa.Uuid(as_uuid=True)),
)


def upgrade() -> None:
    permission_ids = {permission: uuid.uuid4() for permission in Permission}
    op.bulk_insert(
        permissions_table,
        [
            {
                'id': permission_ids[permission],
                'name': permission.value,
                'description': permission.value.replace('_', ' ').lower(),
            }
            for permission in Permission
        ],
    )

    role_ids = {role_name: uuid.uuid4() for role_name in DEFAULT_ROLE_PERMISSIONS}
    op.bulk_insert(
        roles_table,
        [{'id': role_ids[name], 'name': name, 'description': f'{name} access'} for name in DEFAULT_ROLE_PERMISSIONS],
    )
    op.bulk_insert(
        role_permissions_table,
        [
            {'id': uuid.uuid4(), 'role_id': role_ids[name], 'permission_id': permission_ids[permission]}
            for name, granted in DEFAULT_ROLE_PERMISSIONS.items()
            for permission in sorted(granted)
        ],
    )


def downgrade() -> None:
    role_names = list(DEFAULT_ROLE_PERMISSIONS)
    role_ids = sa.select(roles_table.c.id).where(roles_table.c.name.in_(role_names))
    op.execute(role_permissions_table.delete().where(role_permissions_table.c.role_id.in_(role_ids)))
    op.execute(roles_table.delete().where(roles_table.c.name.in_(role_names)))
    op.execute(
        permissions_table.delete().where(permissions_table.c.name.in_([permission.value for permission in Permission]))
    )
