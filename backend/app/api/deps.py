from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import TokenDecodeError, decode_access_token
from app.db.session import get_db
from app.models.constants import ADMIN_ROLE_VALUES, Permission
from app.models.rbac import User
from app.services import permission_service


oauth2_scheme = OAuth2PasswordBearer(tokenUrl='/api/v1/auth/login')


@dataclass(frozen=True)
class Principal:
    user: User
    role_names: frozenset[str]

    @property
    def user_id(self) -> UUID:
        return self.user.id

    @property
    def is_admin_or_owner(self) -> bool:
        return bool(ADMIN_ROLE_VALUES & self.role_names)


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    try:
        payload = decode_access_token(token)
        subject = payload.get('sub')
        if not subject:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid access token subject')
        user_id = UUID(subject)
    except (TokenDecodeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid access token') from exc

    user = db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='User not found')

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Inactive user')
    return current_user


def require_permissions(*required: Permission) -> Callable:
    required_set = frozenset(required)

    def permission_checker(
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_active_user),
    ) -> Principal:
        permission_service.check_permissions(db, user_id=current_user.id, required=required_set)
        return Principal(
            user=current_user,
            role_names=frozenset(permission_service.get_role_names(db, user_id=current_user.id)),
        )

    return permission_checker
