import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from meatline.repositories import ProductRepository
from meatline.models import Product
from meatline.schemas.product import ProductCreate, ProductUpdate
from meatline.exceptions import ConflictError, ProductNotFoundError

logger = logging.getLogger(__name__)


class ProductService:
    """Каталог продукции"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.product_repo = ProductRepository(session)

    async def list_products(self, is_active: Optional[bool] = None) -> List[Product]:
        return await self.product_repo.list_products(is_active)

    async def get_active_products(self) -> List[Product]:
        return await self.product_repo.get_active_products()

    async def get_product(self, product_id: int) -> Product:
        product = await self.product_repo.get(product_id)
        if not product:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, data: ProductCreate) -> Product:
        if await self.product_repo.get_by_code(data.code):
            raise ConflictError(f"Product with code {data.code} already exists", "product_code_exists")
        product = await self.product_repo.create(Product(**data.model_dump()))
        logger.info("Product %s (%s) created", product.code, product.id)
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = await self.get_product(product_id)
        values = data.model_dump(exclude_unset=True)

        new_code = values.get("code")
        if new_code and new_code != product.code and await self.product_repo.get_by_code(new_code):
            raise ConflictError(f"Product with code {new_code} already exists", "product_code_exists")

        for field, value in values.items():
            setattr(product, field, value)
        await self.session.flush()
        await self.session.refresh(product)
        logger.info("Product %s updated: %s", product.id, ", ".join(values) or "-")
        return product

    async def delete_product(self, product_id: int) -> None:
        """Продукт из существующих заказов не удаляется, его можно деактивировать"""
        product = await self.get_product(product_id)
        if await self.product_repo.is_used_in_orders(product_id):
            raise ConflictError("Product is used in orders, deactivate it instead", "product_in_use")
        await self.session.delete(product)
        await self.session.flush()
        logger.info("Product %s deleted", product_id)
