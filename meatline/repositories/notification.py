from typing import List, Optional
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from meatline.models import Notification


class NotificationRepository(BaseRepository[Notification]):
    """Репозиторий уведомлений"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Notification)

    async def get_user_notifications(
        self, user_id: int, is_read: Optional[bool] = None, limit: int = 50
    ) -> List[Notification]:
        query = select(Notification).where(Notification.user_id == user_id)
        if is_read is not None:
            query = query.where(Notification.is_read == is_read)
        result = await self.session.execute(
            query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def count_unread(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read == False,
            )
        )
        return result.scalar_one()

    async def mark_all_read(self, user_id: int) -> int:
        result = await self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read == False)
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def delete_all(self, user_id: int) -> int:
        result = await self.session.execute(
            delete(Notification)
            .where(Notification.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def list_for_entity(self, entity_type: str, entity_id: int) -> List[Notification]:
        result = await self.session.execute(
            select(Notification)
            .where(
                Notification.related_entity_type == entity_type,
                Notification.related_entity_id == entity_id,
            )
            .order_by(Notification.id)
        )
        return list(result.scalars().all())
