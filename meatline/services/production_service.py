import logging
from collections import OrderedDict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from meatline.repositories import OrderRepository, ProductRepository, ProductionBatchRepository
from meatline.models import ProductionBatch, BatchStatusEnum, User
from meatline.schemas.production import DailySummary, ProductSummary
from meatline.exceptions import ValidationError, BatchNotFoundError, ProductNotFoundError
from meatline.utils.numbering import generate_batch_number, allocate_number
from meatline.utils.validators import day_bounds

logger = logging.getLogger(__name__)


class ProductionService:
    """Дневная сводка спроса и производственные партии"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.order_repo = OrderRepository(session)
        self.product_repo = ProductRepository(session)
        self.batch_repo = ProductionBatchRepository(session)

    async def daily_summary(self, day: Optional[Union[date, datetime]]) -> DailySummary:
        """Суммарный спрос по продуктам за календарный день.

        Учитываются все заказы кроме CANCELLED с order_date внутри дня.
        Для каждой позиции берется эффективное количество (корректировка
        производителя, если она есть). Строки идут в порядке первого
        появления продукта. order_count считает позиции, а не заказы.
        """
        if day is None:
            raise ValidationError("Date is required")
        if isinstance(day, datetime):
            day = day.date()

        start, end = day_bounds(day)
        orders = await self.order_repo.get_active_for_period(start, end)

        rows: Dict[str, ProductSummary] = OrderedDict()
        for order in orders:
            for item in order.items:
                code = item.product.code
                row = rows.get(code)
                if row is None:
                    row = ProductSummary(
                        product_id=item.product.id,
                        product_name=item.product.name,
                        product_code=code,
                        unit=item.product.unit.value,
                        total_quantity=Decimal("0"),
                        order_count=0,
                    )
                    rows[code] = row
                row.total_quantity += item.effective_quantity
                row.order_count += 1

        return DailySummary(date=day, total_orders=len(orders), summary=list(rows.values()))

    # ----- Партии -----

    async def create_batch(
        self,
        actor: User,
        production_date: datetime,
        total_capacity: Decimal,
        items: List[Dict],
        notes: Optional[str] = None,
    ) -> ProductionBatch:
        """items: [{"product_id": int, "planned_quantity": Decimal}, ...]"""
        if not items:
            raise ValidationError("Batch must contain at least one item")

        total_capacity = Decimal(str(total_capacity))
        items_data = []
        used_capacity = Decimal("0")
        for item in items:
            if not await self.product_repo.get(item["product_id"]):
                raise ProductNotFoundError(item["product_id"])
            planned = Decimal(str(item["planned_quantity"]))
            used_capacity += planned
            items_data.append({"product_id": item["product_id"], "planned_quantity": planned})

        if used_capacity > total_capacity:
            raise ValidationError(
                f"Total planned quantity ({used_capacity}) exceeds capacity ({total_capacity})"
            )

        batch_number = await allocate_number(generate_batch_number, self.batch_repo.number_exists)
        batch = await self.batch_repo.create_with_items(
            {
                "batch_number": batch_number,
                "production_date": production_date,
                "total_capacity": total_capacity,
                "used_capacity": used_capacity,
                "status": BatchStatusEnum.PLANNED,
                "notes": notes,
                "created_by": actor.id,
            },
            items_data,
        )
        logger.info("Batch %s created by user %s (%s/%s)", batch_number, actor.id, used_capacity, total_capacity)
        return await self.batch_repo.get_with_items(batch.id)

    async def list_batches(
        self,
        status: Optional[BatchStatusEnum] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[ProductionBatch]:
        return await self.batch_repo.list_batches(status, start_date, end_date)

    async def get_batch(self, batch_id: int) -> ProductionBatch:
        batch = await self.batch_repo.get_with_items(batch_id)
        if not batch:
            raise BatchNotFoundError(batch_id)
        return batch

    async def update_batch(
        self,
        batch_id: int,
        status: Optional[BatchStatusEnum] = None,
        notes: Optional[str] = None,
        actual_quantities: Optional[List[Dict]] = None,
    ) -> ProductionBatch:
        """Статус, примечание и фактические количества; емкость не перепроверяется"""
        batch = await self.get_batch(batch_id)

        if status is not None:
            batch.status = status
        if notes is not None:
            batch.notes = notes
        for entry in actual_quantities or []:
            item = await self.batch_repo.get_item(batch_id, entry["item_id"])
            if item:
                item.actual_quantity = Decimal(str(entry["actual_quantity"]))
        await self.session.flush()

        logger.info("Batch %s updated (status=%s)", batch.batch_number, batch.status.value)
        return await self.batch_repo.get_with_items(batch_id)
