import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UnauthorizedError, ValidationError
from app.models.constants import Permission
from app.models.rbac import PermissionRecord, Role, RolePermission, User, UserRole
from app.utils.collections import group_by, load_grouped, unique


logger = logging.getLogger(__name__)

_PERMISSION_NAMES = frozenset(item.value for item in Permission)


def permissions_for_roles(role_permissions: Iterable[Iterable[str]]) -> set[Permission]:
    """Union of the permissions granted by each role. Unknown names are ignored."""
    permissions: set[Permission] = set()
    for granted in role_permissions:
        for name in granted:
            if name in _PERMISSION_NAMES:
                permissions.add(Permission(name))
    return permissions


def _role_permission_rows(db: Session, user_ids: list[UUID]) -> list[tuple[UUID, UUID, str | None]]:
    # Outer joins keep roles that grant nothing; their permission name is None.
    rows = db.execute(
        select(UserRole.user_id, Role.id, PermissionRecord.name)
        .join(Role, Role.id == UserRole.role_id)
        .outerjoin(RolePermission, RolePermission.role_id == Role.id)
        .outerjoin(PermissionRecord, PermissionRecord.id == RolePermission.permission_id)
        .where(UserRole.user_id.in_(user_ids))
    ).all()
    return [(row[0], row[1], row[2]) for row in rows]


def get_user_permissions(db: Session, *, user_id: UUID) -> set[Permission]:
    exists = db.scalar(select(User.id).where(User.id == user_id))
    if not exists:
        raise NotFoundError('User not found')

    rows = _role_permission_rows(db, [user_id])
    by_role = group_by(rows, lambda row: row[1])
    return permissions_for_roles(
        [[name for _, _, name in role_rows if name is not None] for role_rows in by_role.values()]
    )


def check_permissions(db: Session, *, user_id: UUID, required: Iterable[Permission | str]) -> None:
    required_set: set[Permission] = set()
    for item in required:
        if item not in _PERMISSION_NAMES:
            raise ValidationError(f'Unknown permission: {item}')
        required_set.add(Permission(item))

    if not required_set:
        return

    granted = get_user_permissions(db, user_id=user_id)
    missing = required_set - granted
    if missing:
        logger.debug('Permission check failed for user %s, missing %s', user_id, sorted(missing))
        raise UnauthorizedError('Insufficient permissions')


def get_permissions_by_user_ids(db: Session, user_ids: Iterable[UUID]) -> dict[UUID, list[Permission]]:
    grouped = load_grouped(user_ids, lambda ids: _role_permission_rows(db, ids), key=lambda row: row[0])
    result: dict[UUID, list[Permission]] = {}
    for user_id, rows in grouped.items():
        names = [name for _, _, name in rows if name in _PERMISSION_NAMES]
        result[user_id] = [Permission(name) for name in unique(names)]
    return result


def get_roles_by_user_ids(db: Session, user_ids: Iterable[UUID]) -> dict[UUID, list[Role]]:
    def fetch(ids: list[UUID]) -> list[tuple[UUID, Role]]:
        return [
            (row[0], row[1])
            for row in db.execute(
                select(UserRole.user_id, Role)
                .join(Role, Role.id == UserRole.role_id)
                .where(UserRole.user_id.in_(ids))
                .order_by(Role.name)
            ).all()
        ]

    grouped = load_grouped(user_ids, fetch, key=lambda row: row[0])
    return {user_id: [role for _, role in rows] for user_id, rows in grouped.items()}


def get_role_names(db: Session, *, user_id: UUID) -> set[str]:
    return {role.name for role in get_roles_by_user_ids(db, [user_id]).get(user_id, [])}
