from typing import AsyncGenerator, Optional

from aiogram import Bot
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.database.database import get_session_factory
from meatline.exceptions import AuthenticationError, AuthorizationError
from meatline.models import RoleEnum, User
from meatline.repositories import UserRepository
from .security import decode_token


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Сессия на запрос: commit при успехе, rollback при любой ошибке"""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_db),
) -> User:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("No token provided", "no_token")

    payload = decode_token(authorization[len("Bearer "):])
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token", "invalid_token")

    user = await UserRepository(session).get(user_id)
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive", "inactive_user")
    return user


def require_roles(*roles: RoleEnum):
    """Зависимость: пользователь с одной из ролей, иначе 403"""
    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise AuthorizationError("You do not have permission to perform this action")
        return user
    return checker


require_manager = require_roles(RoleEnum.PRODUCER, RoleEnum.ADMIN)
require_admin = require_roles(RoleEnum.ADMIN)


def get_bot(request: Request) -> Optional[Bot]:
    """Bot есть только в режиме webhook; без него уведомления только пишутся в БД"""
    return getattr(request.app.state, "bot", None)
