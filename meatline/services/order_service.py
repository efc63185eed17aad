import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from aiogram import Bot
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.repositories import OrderRepository, ProductRepository, UserRepository
from meatline.models import Order, OrderItem, OrderStatusEnum, RoleEnum, User
from meatline.exceptions import (
    ValidationError, AuthorizationError, OrderNotFoundError, OrderItemNotFoundError,
    ProductNotFoundError, UserNotFoundError
)
from meatline.services.notification_service import NotificationService
from meatline.utils.numbering import generate_order_number, allocate_number
from meatline.utils.permissions import (
    can_manage_orders, is_owner, can_view_order, can_edit_order, can_delete_order
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("order_date", "delivery_date", "notes")


class OrderService:
    """Жизненный цикл заказа и корректировка количеств"""

    def __init__(self, session: AsyncSession, bot: Optional[Bot] = None):
        self.session = session
        self.order_repo = OrderRepository(session)
        self.product_repo = ProductRepository(session)
        self.user_repo = UserRepository(session)
        self.notifications = NotificationService(session, bot)

    async def create_order(
        self,
        actor: User,
        order_date: datetime,
        delivery_date: datetime,
        items: List[Dict],
        notes: Optional[str] = None,
        distributor_id: Optional[int] = None,
    ) -> Order:
        """Создать заказ в статусе DRAFT.

        items: [{"product_id": int, "quantity": Decimal}, ...]
        Дистрибьютор всегда заказывает на себя; производитель и админ
        обязаны указать distributor_id.
        """
        if actor.role == RoleEnum.DISTRIBUTOR:
            distributor_id = actor.id
        if not distributor_id:
            raise ValidationError("Distributor ID is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        if distributor_id != actor.id and not await self.user_repo.get(distributor_id):
            raise UserNotFoundError(distributor_id)

        items_data = []
        for item in items:
            quantity = Decimal(str(item["quantity"]))
            if quantity <= 0:
                raise ValidationError("Quantity must be greater than zero")
            product = await self.product_repo.get(item["product_id"])
            if not product:
                raise ProductNotFoundError(item["product_id"])
            items_data.append({
                "product_id": product.id,
                "quantity": quantity,
                "original_quantity": quantity,
                "unit_price": Decimal("0"),
                "total_price": Decimal("0"),
            })

        order_number = await allocate_number(generate_order_number, self.order_repo.number_exists)
        order = await self.order_repo.create_with_items(
            {
                "order_number": order_number,
                "distributor_id": distributor_id,
                "order_date": order_date,
                "delivery_date": delivery_date,
                "status": OrderStatusEnum.DRAFT,
                "total_amount": Decimal("0"),
                "notes": notes,
            },
            items_data,
        )
        await self.order_repo.add_status_history(
            order.id, OrderStatusEnum.DRAFT, actor.id, "Buyurtma yaratildi"
        )

        logger.info("Order %s created by user %s (%s items)", order_number, actor.id, len(items_data))
        return await self.order_repo.get_with_items(order.id)

    async def _get_visible(self, actor: User, order_id: int) -> Order:
        """Заказ, который actor вправе видеть; чужой заказ для дистрибьютора не существует"""
        order = await self.order_repo.get_with_items(order_id)
        if not order or not can_view_order(actor.role, is_owner(actor, order)):
            raise OrderNotFoundError(order_id)
        return order

    async def get_order(self, actor: User, order_id: int) -> Order:
        return await self._get_visible(actor, order_id)

    async def list_orders(
        self,
        actor: User,
        status: Optional[OrderStatusEnum] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        statuses: Optional[List[OrderStatusEnum]] = None,
        limit: Optional[int] = None,
    ) -> List[Order]:
        distributor_id = actor.id if actor.role == RoleEnum.DISTRIBUTOR else None
        return await self.order_repo.list_orders(
            distributor_id=distributor_id,
            status=status,
            statuses=statuses,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
        )

    async def get_order_items(self, actor: User, order_id: int) -> List[OrderItem]:
        order = await self._get_visible(actor, order_id)
        return list(order.items)

    async def update_order(self, actor: User, order_id: int, patch: Dict) -> Order:
        """Изменить даты и примечание заказа"""
        order = await self.order_repo.get_with_items(order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        owns = is_owner(actor, order)
        if actor.role == RoleEnum.DISTRIBUTOR and not owns:
            raise AuthorizationError("You can only update your own orders")
        if not can_edit_order(actor.role, owns, order.status):
            raise ValidationError("Order can only be updated in DRAFT or SUBMITTED status")

        changed = []
        for field in EDITABLE_FIELDS:
            if field in patch:
                setattr(order, field, patch[field])
                changed.append(field)
        await self.session.flush()

        logger.info("Order %s updated by user %s: %s", order.order_number, actor.id, ", ".join(changed) or "-")
        return await self.order_repo.get_with_items(order_id)

    async def update_status(
        self, actor: User, order_id: int, new_status: OrderStatusEnum, notes: Optional[str] = None
    ) -> Order:
        """Сменить статус: одна запись в истории и одно уведомление дистрибьютору"""
        order = await self.order_repo.get_with_items(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        if not can_manage_orders(actor.role):
            raise AuthorizationError("Only producers and admins can change order status")

        old_status = order.status
        order.status = new_status
        await self.session.flush()
        await self.order_repo.add_status_history(
            order.id, new_status, actor.id, notes or f"Holat {new_status.value}ga o'zgartirildi"
        )

        logger.info(
            "Order %s status %s -> %s by user %s",
            order.order_number, old_status.value, new_status.value, actor.id
        )
        await self.notifications.notify_order_status_change(order, old_status, new_status)
        return await self.order_repo.get_with_items(order_id)

    async def delete_order(self, actor: User, order_id: int) -> None:
        """Удалить черновик вместе с позициями и историей"""
        order = await self.order_repo.get(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        if order.status != OrderStatusEnum.DRAFT:
            raise ValidationError("Only DRAFT orders can be deleted")
        if not can_delete_order(actor.role, is_owner(actor, order), order.status):
            raise AuthorizationError("You can only delete your own orders")

        order_number = order.order_number
        self.session.expunge(order)
        await self.order_repo.delete_with_children(order_id)
        logger.info("Order %s deleted by user %s", order_number, actor.id)

    async def _get_item_for_manager(self, actor: User, order_id: int, item_id: int):
        if not can_manage_orders(actor.role):
            raise AuthorizationError("Only producers and admins can change order items")
        order = await self.order_repo.get(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        item = await self.order_repo.get_item(order_id, item_id)
        if not item:
            raise OrderItemNotFoundError(item_id)
        return order, item

    async def adjust_item(
        self,
        actor: User,
        order_id: int,
        item_id: int,
        adjusted_quantity: Optional[Decimal],
        adjustment_reason: Optional[str],
    ) -> OrderItem:
        """Корректировка количества производителем, исходное количество не меняется"""
        order, item = await self._get_item_for_manager(actor, order_id, item_id)

        if adjusted_quantity is None or not adjustment_reason or not adjustment_reason.strip():
            raise ValidationError("Adjusted quantity and reason are both required")
        adjusted_quantity = Decimal(str(adjusted_quantity))
        if adjusted_quantity <= 0:
            raise ValidationError("Adjusted quantity must be greater than zero")

        old_quantity = item.effective_quantity
        item.adjusted_quantity = adjusted_quantity
        item.adjustment_reason = adjustment_reason.strip()
        await self.session.flush()

        logger.info(
            "Order %s item %s adjusted %s -> %s by user %s",
            order.order_number, item.id, old_quantity, adjusted_quantity, actor.id
        )
        await self.notifications.notify_quantity_change(order, item, old_quantity, item.adjustment_reason)
        return item

    async def remove_item(self, actor: User, order_id: int, item_id: int) -> Order:
        """Удалить позицию; последнюю позицию заказа удалить нельзя"""
        order, item = await self._get_item_for_manager(actor, order_id, item_id)

        if await self.order_repo.count_items(order_id) <= 1:
            raise ValidationError("Cannot remove the last item of an order")

        product_name = item.product.name if item.product else f"#{item.product_id}"
        await self.order_repo.delete_item(item)

        logger.info("Order %s item %s (%s) removed by user %s", order.order_number, item_id, product_name, actor.id)
        await self.notifications.notify_item_removed(order, product_name)
        return await self.order_repo.get_with_items(order_id)
