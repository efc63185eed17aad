"""
Пошаговый конструктор заказа для бота.

selecting_products -> entering_quantity -> selecting_products -> ...
-> selecting_dates -> заказ сохранен (или отменен)
"""
import logging
from typing import List, Optional

from aiogram import Bot
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.models import Order, Product
from meatline.repositories import ProductRepository, UserRepository
from meatline.exceptions import ValidationError, ProductNotFoundError, UserNotFoundError
from meatline.services.order_service import OrderService
from meatline.utils.sessions import (
    OrderSession, OrderSessionStore, SessionItem,
    SELECTING_PRODUCTS, ENTERING_QUANTITY, SELECTING_DATES,
)
from meatline.utils.validators import parse_positive_quantity, parse_date

logger = logging.getLogger(__name__)


class OrderBuilder:
    def __init__(self, session: AsyncSession, store: OrderSessionStore, bot: Optional[Bot] = None):
        self.session = session
        self.store = store
        self.product_repo = ProductRepository(session)
        self.user_repo = UserRepository(session)
        self.order_service = OrderService(session, bot)

    async def start(self, chat_id: int, user_id: int) -> List[Product]:
        """Начать новый заказ; без активных продуктов сессия не создается"""
        products = await self.product_repo.get_active_products()
        if not products:
            return []
        async with self.store.lock(chat_id):
            self.store.set(chat_id, OrderSession(user_id=user_id))
        return products

    async def select_product(self, chat_id: int, product_id: int) -> Optional[OrderSession]:
        """Выбор продукта доступен только на шаге selecting_products; повторный выбор - ValidationError"""
        async with self.store.lock(chat_id):
            order_session = self.store.get(chat_id)
            if not order_session or order_session.step != SELECTING_PRODUCTS:
                return None
            if product_id in order_session.selected_product_ids():
                raise ValidationError("Product is already in the order")
            product = await self.product_repo.get(product_id)
            if not product:
                raise ProductNotFoundError(product_id)
            order_session.items.append(SessionItem(product_id=product.id, product_name=product.name))
            order_session.step = ENTERING_QUANTITY
            return order_session

    async def enter_quantity(self, chat_id: int, text: str) -> Optional[List[Product]]:
        """Количество для последнего выбранного продукта.

        Возвращает продукты, которые еще можно добавить. Нечисловой или
        неположительный ввод - ValidationError, шаг не меняется.
        """
        async with self.store.lock(chat_id):
            order_session = self.store.get(chat_id)
            if not order_session or order_session.step != ENTERING_QUANTITY:
                return None
            quantity = parse_positive_quantity(text)
            if quantity is None:
                raise ValidationError("Quantity must be a positive number")
            order_session.items[-1].quantity = quantity
            order_session.step = SELECTING_PRODUCTS
            selected = set(order_session.selected_product_ids())

        products = await self.product_repo.get_active_products()
        return [p for p in products if p.id not in selected]

    async def confirm(self, chat_id: int) -> Optional[OrderSession]:
        """Закончить выбор продуктов и перейти к датам"""
        async with self.store.lock(chat_id):
            order_session = self.store.get(chat_id)
            if not order_session or order_session.step != SELECTING_PRODUCTS:
                return None
            if not order_session.items:
                raise ValidationError("Select at least one product")
            if any(item.quantity <= 0 for item in order_session.items):
                raise ValidationError("Every product needs a positive quantity")
            order_session.step = SELECTING_DATES
            return order_session

    async def enter_date(self, chat_id: int, text: str) -> Optional[Order]:
        """Первая дата - дата заказа, вторая - доставки; после второй заказ сохраняется"""
        async with self.store.lock(chat_id):
            order_session = self.store.get(chat_id)
            if not order_session or order_session.step != SELECTING_DATES:
                return None
            value = parse_date(text)
            if value is None:
                raise ValidationError("Date must be in YYYY-MM-DD format")

            if order_session.order_date is None:
                order_session.order_date = value
                return None
            order_session.delivery_date = value

            actor = await self.user_repo.get(order_session.user_id)
            if not actor:
                raise UserNotFoundError(order_session.user_id)
            order = await self.order_service.create_order(
                actor,
                order_date=order_session.order_date,
                delivery_date=order_session.delivery_date,
                items=[
                    {"product_id": item.product_id, "quantity": item.quantity}
                    for item in order_session.items
                ],
                notes=order_session.notes,
            )
            self.store.clear(chat_id)
            logger.info("Bot order %s completed for chat %s", order.order_number, chat_id)
            return order

    async def cancel(self, chat_id: int) -> None:
        async with self.store.lock(chat_id):
            self.store.clear(chat_id)
