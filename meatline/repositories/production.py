from typing import List, Optional
from datetime import datetime
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from .base import BaseRepository
from meatline.models import ProductionBatch, ProductionBatchItem, BatchStatusEnum


class ProductionBatchRepository(BaseRepository[ProductionBatch]):
    """Репозиторий производственных партий"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ProductionBatch)

    async def get_with_items(self, batch_id: int) -> Optional[ProductionBatch]:
        result = await self.session.execute(
            select(ProductionBatch)
            .where(ProductionBatch.id == batch_id)
            .options(selectinload(ProductionBatch.items).selectinload(ProductionBatchItem.product))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def number_exists(self, batch_number: str) -> bool:
        result = await self.session.execute(
            select(func.count(ProductionBatch.id)).where(ProductionBatch.batch_number == batch_number)
        )
        return result.scalar_one() > 0

    async def list_batches(
        self,
        status: Optional[BatchStatusEnum] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[ProductionBatch]:
        query = select(ProductionBatch)
        if status is not None:
            query = query.where(ProductionBatch.status == status)
        if start_date is not None and end_date is not None:
            query = query.where(
                ProductionBatch.production_date >= start_date,
                ProductionBatch.production_date <= end_date,
            )
        result = await self.session.execute(
            query.options(selectinload(ProductionBatch.items).selectinload(ProductionBatchItem.product))
            .order_by(ProductionBatch.created_at.desc(), ProductionBatch.id.desc())
        )
        return list(result.scalars().all())

    async def create_with_items(self, batch_data: dict, items_data: List[dict]) -> ProductionBatch:
        batch = ProductionBatch(**batch_data)
        self.session.add(batch)
        await self.session.flush()

        for item_data in items_data:
            self.session.add(ProductionBatchItem(batch_id=batch.id, **item_data))

        await self.session.flush()
        return batch

    async def get_item(self, batch_id: int, item_id: int) -> Optional[ProductionBatchItem]:
        result = await self.session.execute(
            select(ProductionBatchItem).where(
                ProductionBatchItem.id == item_id,
                ProductionBatchItem.batch_id == batch_id,
            )
        )
        return result.scalars().first()
