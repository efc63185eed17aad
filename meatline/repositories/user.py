from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from meatline.models import User, RoleEnum


class UserRepository(BaseRepository[User]):
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        """Получить пользователя по Telegram ID"""
        result = await self.session.execute(
            select(User).where(User.telegram_id == telegram_id)
        )
        return result.scalars().first()

    async def get_by_role(self, role: RoleEnum, active_only: bool = True) -> List[User]:
        """Получить пользователей по роли"""
        query = select(User).where(User.role == role)
        if active_only:
            query = query.where(User.is_active == True)
        result = await self.session.execute(query.order_by(User.id))
        return list(result.scalars().all())

    async def get_pending(self) -> List[User]:
        """Пользователи, ожидающие подтверждения"""
        result = await self.session.execute(
            select(User)
            .where(User.is_active == False)
            .order_by(User.created_at)
        )
        return list(result.scalars().all())
