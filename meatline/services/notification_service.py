import logging
from decimal import Decimal
from typing import List, Optional

from aiogram import Bot
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import (
    Notification, NotificationTypeEnum, Order, OrderItem, OrderStatusEnum, RoleEnum, User
)
from meatline.repositories import NotificationRepository, UserRepository
from meatline.exceptions import NotificationNotFoundError, AuthorizationError

logger = logging.getLogger(__name__)

TYPE_EMOJI = {
    NotificationTypeEnum.ORDER_STATUS: "📊",
    NotificationTypeEnum.ORDER_CHANGE: "📝",
    NotificationTypeEnum.PRODUCTION_UPDATE: "🔨",
    NotificationTypeEnum.SYSTEM: "⚙️",
}


def _fmt_qty(value: Decimal) -> str:
    return f"{value.normalize():f}" if isinstance(value, Decimal) else str(value)


class NotificationService:
    """Сервис уведомлений.

    Уведомление пишется в той же сессии, что и основное изменение, но в
    отдельном SAVEPOINT: ошибка записи логируется и не откатывает смену
    статуса или количества. Если передан bot, уведомление дополнительно
    отправляется получателю в Telegram.
    """

    def __init__(self, session: AsyncSession, bot: Optional[Bot] = None):
        self.session = session
        self.bot = bot
        self.notification_repo = NotificationRepository(session)
        self.user_repo = UserRepository(session)

    async def create(
        self,
        user_id: int,
        type: NotificationTypeEnum,
        title: str,
        message: str,
        related_entity_type: Optional[str] = None,
        related_entity_id: Optional[int] = None,
    ) -> Optional[Notification]:
        """Создать уведомление; None если запись не удалась"""
        try:
            async with self.session.begin_nested():
                notification = await self.notification_repo.create(Notification(
                    user_id=user_id,
                    type=type,
                    title=title,
                    message=message,
                    related_entity_type=related_entity_type,
                    related_entity_id=related_entity_id,
                ))
        except Exception:
            logger.exception("Failed to create %s notification for user %s", type.value, user_id)
            return None

        await self._push(notification)
        return notification

    async def create_bulk(self, user_ids: List[int], type: NotificationTypeEnum,
                          title: str, message: str) -> int:
        """Одно уведомление нескольким пользователям"""
        created = 0
        for user_id in user_ids:
            if await self.create(user_id, type, title, message):
                created += 1
        return created

    async def notify_all_distributors(self, title: str, message: str,
                                      type: NotificationTypeEnum = NotificationTypeEnum.SYSTEM) -> int:
        distributors = await self.user_repo.get_by_role(RoleEnum.DISTRIBUTOR)
        return await self.create_bulk([d.id for d in distributors], type, title, message)

    async def notify_order_status_change(
        self, order: Order, old_status: OrderStatusEnum, new_status: OrderStatusEnum
    ) -> Optional[Notification]:
        return await self.create(
            user_id=order.distributor_id,
            type=NotificationTypeEnum.ORDER_STATUS,
            title="Buyurtma holati o'zgartirildi",
            message=(
                f"Buyurtma {order.order_number} holati "
                f"{old_status.value} dan {new_status.value} ga o'zgartirildi"
            ),
            related_entity_type="order",
            related_entity_id=order.id,
        )

    async def notify_quantity_change(
        self, order: Order, item: OrderItem, old_quantity: Decimal, reason: str
    ) -> Optional[Notification]:
        product_name = item.product.name if item.product else f"#{item.product_id}"
        return await self.create(
            user_id=order.distributor_id,
            type=NotificationTypeEnum.ORDER_CHANGE,
            title="Buyurtma miqdori o'zgartirildi",
            message=(
                f"{product_name} mahsuloti miqdori {_fmt_qty(old_quantity)} dan "
                f"{_fmt_qty(item.adjusted_quantity)} ga o'zgartirildi. Sabab: {reason}"
            ),
            related_entity_type="order",
            related_entity_id=order.id,
        )

    async def notify_item_removed(self, order: Order, product_name: str) -> Optional[Notification]:
        return await self.create(
            user_id=order.distributor_id,
            type=NotificationTypeEnum.ORDER_CHANGE,
            title="Buyurtmadan mahsulot olib tashlandi",
            message=f"{product_name} mahsuloti {order.order_number} buyurtmadan olib tashlandi",
            related_entity_type="order",
            related_entity_id=order.id,
        )

    async def _push(self, notification: Notification) -> None:
        """Отправить уведомление в Telegram, ошибки только логируются"""
        if not self.bot:
            return
        try:
            user = await self.user_repo.get(notification.user_id)
            if not user:
                return
            emoji = TYPE_EMOJI.get(notification.type, "📋")
            await self.bot.send_message(
                chat_id=user.telegram_id,
                text=f"{emoji} <b>{notification.title}</b>\n\n{notification.message}",
                parse_mode="HTML",
            )
        except Exception:
            logger.warning("Telegram push failed for notification %s", notification.id, exc_info=True)

    # ----- Входящие уведомления пользователя -----

    async def get_user_notifications(self, user: User, is_read: Optional[bool] = None,
                                     limit: int = 50) -> List[Notification]:
        return await self.notification_repo.get_user_notifications(user.id, is_read, limit)

    async def count_unread(self, user: User) -> int:
        return await self.notification_repo.count_unread(user.id)

    async def get_notification(self, user: User, notification_id: int) -> Notification:
        """Только получатель может видеть уведомление"""
        notification = await self.notification_repo.get(notification_id)
        if not notification:
            raise NotificationNotFoundError(notification_id)
        if notification.user_id != user.id:
            raise AuthorizationError("You cannot access this notification")
        return notification

    async def mark_as_read(self, user: User, notification_id: int) -> Notification:
        notification = await self.get_notification(user, notification_id)
        notification.is_read = True
        await self.session.flush()
        return notification

    async def mark_all_as_read(self, user: User) -> int:
        count = await self.notification_repo.mark_all_read(user.id)
        logger.info("User %s marked %s notifications as read", user.id, count)
        return count

    async def delete_notification(self, user: User, notification_id: int) -> None:
        notification = await self.get_notification(user, notification_id)
        await self.session.delete(notification)
        await self.session.flush()

    async def delete_all(self, user: User) -> int:
        count = await self.notification_repo.delete_all(user.id)
        logger.info("User %s deleted %s notifications", user.id, count)
        return count
