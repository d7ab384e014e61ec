from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from paper_review.core.errors import Forbidden, InvalidToken, Unauthenticated
from paper_review.core.security import JWTError, decode_access_token

# auto_error=False: отсутствие токена обрабатываем сами (401)
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerContext:
    """Кто выполняет запрос"""
    subject: str
    is_admin: bool = False
    username: Optional[str] = None


def claims_to_context(payload: Dict[str, Any]) -> CallerContext:
    """Преобразование проверенных claims токена в контекст вызывающего"""
    subject = payload.get("sub")
    if not subject:
        raise InvalidToken()

    if payload.get("is_admin") is True:
        return CallerContext(subject=str(subject), is_admin=True)

    return CallerContext(subject=str(subject), username=payload.get("username"))


async def get_caller(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> CallerContext:
    """Зависимость: проверка токена из заголовка Authorization"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    settings = request.app.state.settings
    try:
        payload = decode_access_token(
            credentials.credentials, settings.jwt_secret, settings.jwt_algorithm
        )
    except JWTError:
        raise InvalidToken()

    return claims_to_context(payload)


def require_admin(ctx: CallerContext) -> None:
    if not ctx.is_admin:
        raise Forbidden()


def require_admin_or_self(ctx: CallerContext, owner_id: Union[str, uuid.UUID]) -> None:
    if not ctx.is_admin and ctx.subject != str(owner_id):
        raise Forbidden()


async def get_admin(caller: CallerContext = Depends(get_caller)) -> CallerContext:
    """Зависимость: только администратор"""
    require_admin(caller)
    return caller
