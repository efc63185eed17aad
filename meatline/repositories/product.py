from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from meatline.models import Product, OrderItem


class ProductRepository(BaseRepository[Product]):
    """Репозиторий для работы с продукцией"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Product)

    async def get_by_code(self, code: str) -> Optional[Product]:
        result = await self.session.execute(
            select(Product).where(Product.code == code)
        )
        return result.scalars().first()

    async def get_active_products(self) -> List[Product]:
        """Получить активные товары"""
        result = await self.session.execute(
            select(Product)
            .where(Product.is_active == True)
            .order_by(Product.name)
        )
        return list(result.scalars().all())

    async def list_products(self, is_active: Optional[bool] = None) -> List[Product]:
        query = select(Product)
        if is_active is not None:
            query = query.where(Product.is_active == is_active)
        result = await self.session.execute(query.order_by(Product.name))
        return list(result.scalars().all())

    async def is_used_in_orders(self, product_id: int) -> bool:
        result = await self.session.execute(
            select(func.count(OrderItem.id)).where(OrderItem.product_id == product_id)
        )
        return result.scalar_one() > 0
