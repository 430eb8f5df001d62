from typing import Optional

from fastapi import Request
from jose import jwt, JWTError
from pydantic import ValidationError

from reviews_service.app.config import settings
from reviews_service.app.logger import logger
from reviews_service.app.schemas import Principal


def get_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]
    token = request.cookies.get("access_token")
    if token and token.startswith("Bearer "):
        token = token[7:]
    return token or None


async def get_current_principal(request: Request) -> Optional[Principal]:
    """Возвращает пользователя из токена или None; HTTP-ошибку не бросает."""
    token = get_token(request)
    if not token:
        logger.info("Запрос без токена", extra={"path": request.url.path})
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning(
            "Ошибка декодирования JWT токена",
            extra={"path": request.url.path, "error": str(e)}
        )
        return None
    user_id = payload.get("id", payload.get("sub"))
    email = payload.get("email")
    try:
        principal = Principal(id=user_id, email=email if isinstance(email, str) else None)
    except ValidationError as e:
        logger.warning(
            "Некорректный ID пользователя в токене",
            extra={"path": request.url.path, "error": str(e)}
        )
        return None
    logger.info("Успешно получен ID пользователя из токена", extra={"user_id": principal.id})
    return principal


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def is_owner(principal: Optional[Principal], owner_id) -> bool:
    if principal is None:
        return False
    owner = _as_int(owner_id)
    return owner is not None and owner == principal.id
