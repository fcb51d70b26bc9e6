import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'users'

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user_roles: Mapped[list['UserRole']] = relationship(back_populates='user', cascade='all, delete-orphan')


class Role(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'roles'

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user_roles: Mapped[list['UserRole']] = relationship(back_populates='role', cascade='all, delete-orphan')
    role_permissions: Mapped[list['RolePermission']] = relationship(
        back_populates='role', cascade='all, delete-orphan'
    )


class PermissionRecord(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'permissions'

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    role_permissions: Mapped[list['RolePermission']] = relationship(
        back_populates='permission', cascade='all, delete-orphan'
    )


class UserRole(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'user_roles'
    __table_args__ = (UniqueConstraint('user_id', 'role_id', name='uq_user_roles_user_role'),)

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    role_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('roles.id', ondelete='CASCADE'), nullable=False)

    user: Mapped['User'] = relationship(back_populates='user_roles')
    role: Mapped['Role'] = relationship(back_populates='user_roles')


class RolePermission(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'role_permissions'
    __table_args__ = (UniqueConstraint('role_id', 'permission_id', name='uq_role_permissions_role_permission'),)

    role_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey('roles.id', ondelete='CASCADE'), nullable=False)
    permission_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('permissions.id', ondelete='CASCADE'), nullable=False
    )

    role: Mapped['Role'] = relationship(back_populates='role_permissions')
    permission: Mapped['PermissionRecord'] = relationship(back_populates='role_permissions')


Index('ix_user_roles_user_id', UserRole.user_id)
Index('ix_user_roles_role_id', UserRole.role_id)
Index('ix_role_permissions_role_id', RolePermission.role_id)
