from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from app.core.config import settings


class TokenDecodeError(Exception):
    pass


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    data: dict[str, Any] = {'sub': subject, 'token_type': 'access'}
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    data.update({'exp': expire})
    return jwt.encode(data, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise TokenDecodeError('Could not decode token') from exc

    if payload.get('token_type') != 'access':
        raise TokenDecodeError('Invalid token type')
    return payload
