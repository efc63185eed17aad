from typing import List, Optional
from datetime import datetime
from sqlalchemy import select, delete, func
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from meatline.models import Order, OrderItem, OrderStatusHistory, OrderStatusEnum


def _with_details(query):
    """Подгрузка позиций, продуктов, дистрибьютора и истории"""
    return query.options(
        selectinload(Order.items).selectinload(OrderItem.product),
        selectinload(Order.distributor),
        selectinload(Order.status_history).selectinload(OrderStatusHistory.user),
    )


class OrderRepository(BaseRepository[Order]):
    """Репозиторий для работы с заказами"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Order)

    async def get_with_items(self, order_id: int) -> Optional[Order]:
        """Заказ со всеми связанными данными"""
        result = await self.session.execute(
            _with_details(select(Order).where(Order.id == order_id))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def number_exists(self, order_number: str) -> bool:
        result = await self.session.execute(
            select(func.count(Order.id)).where(Order.order_number == order_number)
        )
        return result.scalar_one() > 0

    async def list_orders(
        self,
        distributor_id: Optional[int] = None,
        status: Optional[OrderStatusEnum] = None,
        statuses: Optional[List[OrderStatusEnum]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Order]:
        """Список заказов с фильтрами, новые сверху"""
        query = select(Order)
        if distributor_id is not None:
            query = query.where(Order.distributor_id == distributor_id)
        if status is not None:
            query = query.where(Order.status == status)
        if statuses:
            query = query.where(Order.status.in_(statuses))
        if start_date is not None and end_date is not None:
            query = query.where(Order.order_date >= start_date, Order.order_date <= end_date)
        query = _with_details(query).order_by(Order.created_at.desc(), Order.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active_for_period(self, start: datetime, end: datetime) -> List[Order]:
        """Неотмененные заказы с order_date в [start, end]"""
        result = await self.session.execute(
            select(Order)
            .where(
                Order.order_date >= start,
                Order.order_date <= end,
                Order.status != OrderStatusEnum.CANCELLED,
            )
            .options(selectinload(Order.items).selectinload(OrderItem.product))
            .order_by(Order.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create_with_items(self, order_data: dict, items_data: List[dict]) -> Order:
        """Создать заказ с позициями"""
        order = Order(**order_data)
        self.session.add(order)
        await self.session.flush()

        for item_data in items_data:
            self.session.add(OrderItem(order_id=order.id, **item_data))

        await self.session.flush()
        return order

    async def add_status_history(
        self, order_id: int, status: OrderStatusEnum, changed_by: int, notes: Optional[str] = None
    ) -> OrderStatusHistory:
        entry = OrderStatusHistory(
            order_id=order_id,
            status=status,
            changed_by=changed_by,
            notes=notes,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_history(self, order_id: int) -> List[OrderStatusHistory]:
        result = await self.session.execute(
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order_id)
            .order_by(OrderStatusHistory.id)
        )
        return list(result.scalars().all())

    async def get_item(self, order_id: int, item_id: int) -> Optional[OrderItem]:
        """Позиция, принадлежащая заказу"""
        result = await self.session.execute(
            select(OrderItem)
            .where(OrderItem.id == item_id, OrderItem.order_id == order_id)
            .options(selectinload(OrderItem.product))
        )
        return result.scalars().first()

    async def count_items(self, order_id: int) -> int:
        result = await self.session.execute(
            select(func.count(OrderItem.id)).where(OrderItem.order_id == order_id)
        )
        return result.scalar_one()

    async def delete_item(self, item: OrderItem) -> None:
        await self.session.delete(item)
        await self.session.flush()

    async def delete_with_children(self, order_id: int) -> bool:
        """Удалить позиции и историю, затем сам заказ"""
        await self.session.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
        await self.session.execute(
            delete(OrderStatusHistory).where(OrderStatusHistory.order_id == order_id)
        )
        result = await self.session.execute(delete(Order).where(Order.id == order_id))
        await self.session.flush()
        return result.rowcount > 0
